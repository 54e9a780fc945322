
from fastapi import HTTPException, status


class DocScanError(HTTPException):
    """Base for errors raised by the services.

    Subclasses pin the HTTP status and a default message so route handlers
    never translate them; FastAPI renders them as ``{"detail": message}``.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal error"

    def __init__(self, detail: str | None = None, headers: dict | None = None):
        super().__init__(status_code=type(self).status_code, detail=detail or self.message, headers=headers)


class ValidationError(DocScanError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class InvalidAmount(ValidationError):
    message = "Credit amount must be greater than 0"


class AuthError(DocScanError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class InvalidCredentials(AuthError):
    message = "Invalid credentials"


class AccessDenied(DocScanError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


class InsufficientCredits(DocScanError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Insufficient credits"


class NotFound(DocScanError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class DocumentNotFound(NotFound):
    message = "Document not found"


class RequestNotFound(NotFound):
    message = "Credit request not found"


class DuplicateUsername(DocScanError):
    status_code = status.HTTP_409_CONFLICT
    message = "Username already exists"


class StorageError(DocScanError):
    message = "Storage failure"
