"""
Error taxonomy for the clearance service.

Services raise these; the handlers registered in ``nodues.main`` turn them into
``{"message": ..., "code": ...}`` JSON bodies with the matching status code.
"""

from typing import Any, Dict, Optional


class NoDuesError(Exception):
    """Base exception for all service errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "SERVER_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


# ============================================
# Request validation
# ============================================

class ValidationError(NoDuesError):
    """Missing or duplicate fields"""

    status_code = 400

    def __init__(self, message: str = "Invalid request", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConflictError(ValidationError):
    """A unique field (email) is already taken"""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message)
        self.code = "CONFLICT"


class InvalidDepartment(ValidationError):
    def __init__(self, department: str):
        super().__init__(f"Invalid department '{department}'")
        self.code = "INVALID_DEPARTMENT"
        self.details = {"department": department}


class NoFile(ValidationError):
    def __init__(self):
        super().__init__("No file uploaded")
        self.code = "NO_FILE"


class FileTooLarge(ValidationError):
    status_code = 413

    def __init__(self, max_bytes: int):
        super().__init__(f"File exceeds {max_bytes // (1024 * 1024)} MB limit.")
        self.code = "FILE_TOO_LARGE"


# ============================================
# Authentication & Authorization
# ============================================

class InvalidCredentials(NoDuesError):
    """Unknown email or wrong password; the two cases are indistinguishable"""

    status_code = 401

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class Unauthenticated(NoDuesError):
    """No bearer token on a protected route"""

    status_code = 401

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code="UNAUTHENTICATED")


class InvalidToken(Unauthenticated):
    """Bad signature, expired, or malformed claims"""

    def __init__(self):
        super().__init__("Invalid token")
        self.code = "INVALID_TOKEN"


class Forbidden(NoDuesError):
    status_code = 403

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code="FORBIDDEN")


# ============================================
# Lookup & infrastructure
# ============================================

class NotFound(NoDuesError):
    status_code = 404

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found", code="NOT_FOUND")


class ServerError(NoDuesError):
    status_code = 500

    def __init__(self, error: str = ""):
        super().__init__("Server error", code="SERVER_ERROR")
        self.error = error

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.error:
            body["error"] = self.error
        return body
