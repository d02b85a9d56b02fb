from typing import Optional


class SurveyError(Exception):
    """Base error rendered as a JSON response by the app's error handler"""

    status_code = 500
    error = "server_error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.error)
        self.message = message

    def to_dict(self):
        body = {"ok": False, "error": self.error}
        if self.message:
            body["message"] = self.message
        return body


class PayloadValidationError(SurveyError):
    status_code = 400
    error = "invalid_payload"


class DuplicateSubmissionError(SurveyError):
    status_code = 403
    error = "duplicate_ip"


class AdminTokenError(SurveyError):
    status_code = 403
    error = "forbidden"


class StorageUnavailableError(SurveyError):
    # never carries a message: driver details stay in the logs
    status_code = 500
    error = "server_error"
