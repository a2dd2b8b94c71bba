"""Client error taxonomy.

ApiError
├── TransportError       network failure, no response received
├── ApiResponseError     non-2xx response; carries status and server detail
└── FormValidationError  client-side validation; carries field -> message
"""

from typing import Any, Dict


class ApiError(Exception):
    """Base exception for everything a view can catch from an API call."""
    pass


class TransportError(ApiError):
    """The request never produced a response."""
    pass


class ApiResponseError(ApiError):
    def __init__(self, status_code: int, detail: Any = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"API returned {status_code}: {self.message}")

    @property
    def message(self) -> str:
        """Human-readable form of the server's `detail`."""
        if isinstance(self.detail, list):
            # FastAPI validation errors: [{"loc": [...], "msg": "..."}]
            parts = []
            for item in self.detail:
                if isinstance(item, dict):
                    field = ".".join(str(p) for p in item.get("loc", [])[1:])
                    msg = item.get("msg", "")
                    parts.append(f"{field}: {msg}" if field else msg)
                else:
                    parts.append(str(item))
            return "; ".join(parts)
        if self.detail:
            return str(self.detail)
        return "Request failed"

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class FormValidationError(ApiError):
    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))
