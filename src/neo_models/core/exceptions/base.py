"""Root of the neo-models exception hierarchy.

Every library error has a short error_code ("transition", "data_type",
"data_portal", ...) and a details dict holding the values its message
was built from.
"""

from typing import Any, Dict, Optional


class NeoModelsError(Exception):
    """Base exception for all neo-models errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.__class__.__name__,
            "code": self.error_code,
            "message": self.message,
            "details": dict(self.details),
        }


def create_error_response(exception: BaseException) -> Dict[str, Any]:
    """Render an exception as a plain dict.

    Errors outside the hierarchy get the code "unexpected". A wrapped
    cause, as carried by DataPortalError, is rendered under "cause".
    """
    if isinstance(exception, NeoModelsError):
        error = exception.to_dict()
    else:
        error = {
            "type": exception.__class__.__name__,
            "code": "unexpected",
            "message": str(exception),
            "details": {},
        }
    cause = getattr(exception, "cause", None)
    if isinstance(cause, BaseException):
        error["cause"] = create_error_response(cause)["error"]
    return {"error": error}
