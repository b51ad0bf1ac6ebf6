import base64
import binascii


def decode_base64_payload(payload: str) -> bytes:
    """
    Decodes a base64 string, accepting an optional `data:<mime>;base64,` prefix
    and embedded line breaks.

    Raises ValueError if the payload is not valid base64.
    """
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        return base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
