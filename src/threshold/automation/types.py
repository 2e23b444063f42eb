from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class LoginResult(str, Enum):
    SUCCESS = "Success"
    INVALID_PASSWORD = "InvalidPassword"
    CHANGE_PASSWORD = "ChangePassword"
    UNKNOWN_ERROR = "UnknownError"


class ErrorType(str, Enum):
    GENERAL = "GENERAL_ERROR"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    CHANGE_PASSWORD = "CHANGE_PASSWORD"
    TIMEOUT = "TIMEOUT"
    TWO_FACTOR_RETRIEVER_MISSING = "TWO_FACTOR_RETRIEVER_MISSING"


class ProgressType(str, Enum):
    INITIALIZING = "INITIALIZING"
    START_SCRAPING = "START_SCRAPING"
    LOGGING_IN = "LOGGING_IN"
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILED = "LOGIN_FAILED"
    CHANGE_PASSWORD = "CHANGE_PASSWORD"
    END_SCRAPING = "END_SCRAPING"
    TERMINATING = "TERMINATING"


@dataclass(frozen=True)
class LoginOutcome:
    success: bool
    error_type: Optional[ErrorType] = None
    error_message: Optional[str] = None

    @classmethod
    def general_error(cls) -> "LoginOutcome":
        return cls(success=False, error_type=ErrorType.GENERAL)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"success": self.success}
        if self.error_type is not None:
            data["error_type"] = self.error_type.value
        if self.error_message is not None:
            data["error_message"] = self.error_message
        return data
