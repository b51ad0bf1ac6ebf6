from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from app.core.logging import get_logger

logger = get_logger("body-limit")


class BodySizeLimitMiddleware:
    """
    Rejects request bodies larger than `settings.MAX_BODY_BYTES` with a 413.

    A declared Content-Length is checked up front. Bodies without one (chunked
    uploads) are buffered up to the limit and then replayed to the app.
    """

    def __init__(self, app, settings):
        self.app = app
        self.settings = settings

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = self.settings.MAX_BODY_BYTES
        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            if content_length.isdigit() and int(content_length) > limit:
                await self._reject(scope, receive, send, content_length)
                return
            await self.app(scope, receive, send)
            return

        body = bytearray()
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body.extend(message.get("body", b""))
            if len(body) > limit:
                await self._reject(scope, receive, send, f"more than {limit}")
                return
            more_body = message.get("more_body", False)

        replayed = False

        async def replay_receive():
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": bytes(body), "more_body": False}
            return await receive()

        await self.app(scope, replay_receive, send)

    async def _reject(self, scope, receive, send, size):
        logger.warning(f"Rejected {scope['method']} {scope['path']}: body of {size} bytes exceeds {self.settings.MAX_BODY_BYTES}")
        response = JSONResponse(status_code=413, content={"error": "Request body too large"})
        await response(scope, receive, send)
