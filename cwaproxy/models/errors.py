"""Error taxonomy for the weather proxy.

Every error the request handler knows how to report derives from ProxyError
and carries the HTTP status and the short kind used in the error envelope.
"""

from typing import Any

GENERIC_ERROR = {
    "error": "Server error",
    "message": "Unable to fetch weather data, please try again later",
}


class ProxyError(Exception):
    status_code: int = 500
    kind: str = "Server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def detail(self) -> dict[str, Any]:
        """Extra fields merged into the error envelope."""
        return {}

    def to_response(self) -> dict[str, Any]:
        return {"error": self.kind, "message": self.message, **self.detail()}


class InvalidLocationCode(ProxyError):
    status_code = 400
    kind = "Invalid city code"

    def __init__(self, code: str, available: list[str]):
        super().__init__("Please use a valid city code")
        self.code = code
        self.available = available

    def detail(self) -> dict[str, Any]:
        return {"availableCities": list(self.available)}


class MissingCredential(ProxyError):
    status_code = 500
    kind = "Server configuration error"

    def __init__(self, message: str = "Set CWA_API_KEY in the environment or .env file"):
        super().__init__(message)


class UpstreamFailure(ProxyError):
    """Raised when the CWA API answers with a non-success status."""

    kind = "CWA API error"

    def __init__(self, status_code: int, body: Any):
        message = None
        if isinstance(body, dict):
            message = body.get("message")
        super().__init__(message or "Unable to fetch weather data")
        self.status_code = status_code
        self.body = body

    def detail(self) -> dict[str, Any]:
        return {"details": self.body}


class MalformedPayload(ProxyError):
    status_code = 500
    kind = "Malformed upstream payload"


class LocationNotFound(MalformedPayload):
    status_code = 404
    kind = "No data"

    def __init__(self, location_name: str | None = None):
        if location_name:
            message = f"No weather data available for {location_name}"
        else:
            message = "Upstream payload contains no location entry"
        super().__init__(message)
        self.location_name = location_name
