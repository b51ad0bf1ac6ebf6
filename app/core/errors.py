class RelayError(Exception):
    """Base class for failures raised by the relay's external collaborators."""


class DetectionProviderError(RelayError):
    """The face-detection provider call failed or returned an error payload."""


class StorageError(RelayError):
    """Reading from or writing to the object store failed."""


class ObjectNotFoundError(StorageError):
    def __init__(self, key: str):
        super().__init__(f"Object '{key}' not found")
        self.key = key
