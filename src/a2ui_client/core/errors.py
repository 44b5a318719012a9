"""Error taxonomy for the surface client."""


class A2UIError(Exception):
    """Base class for all client errors."""

    pass


class DecodeError(A2UIError):
    """An NDJSON batch could not be decoded. The batch is never applied."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class TransportError(A2UIError):
    """HTTP round trip failed (network error or non-success status)."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ResolutionError(A2UIError):
    """Component tree could not be walked (reference cycle or depth overflow)."""

    def __init__(self, message: str, component_id: str, path: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.component_id = component_id
        self.path = path
