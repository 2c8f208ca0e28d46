class ApiError(RuntimeError):
    """Base class for failures talking to the GitHub REST API."""

    code = "API_ERROR"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__(self.code if detail is None else f"{self.code}: {detail}")


class NotFound(ApiError):
    code = "NOT_FOUND"


class RateLimited(ApiError):
    code = "RATE_LIMIT"


class HttpError(ApiError):
    """Any non-2xx status that is neither 404 nor 403."""

    def __init__(self, status: int, detail: str | None = None):
        self.status = status
        self.code = f"HTTP_ERROR_{status}"
        super().__init__(detail)


class TransportError(ApiError):
    """Network-level failure that never produced a status line (DNS, timeout, reset)."""

    code = "TRANSPORT_ERROR"
