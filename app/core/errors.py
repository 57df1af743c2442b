"""
API error taxonomy.

Every failure a route can report is an ApiError subclass. The exception
handlers registered in main.py turn them into
{"success": false, "error": ..., "code": ..., "message": ...} responses.
"""
from typing import Any, Optional
from fastapi import status


class ApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"
    error = "Internal server error"
    message = "Something went wrong"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {
            "success": False,
            "error": self.error,
            "code": self.code,
            "message": self.message,
        }
        if self.details is not None:
            body["details"] = self.details
        return body


class MissingFields(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "MISSING_FIELDS"
    error = "Missing required fields"
    message = "Required fields are missing"


class InvalidFormat(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_FORMAT"
    error = "Invalid format"
    message = "Request data has an invalid format"


class InvalidId(InvalidFormat):
    code = "INVALID_ID"
    error = "Invalid ID"
    message = "The supplied ID is not valid"


class InvalidRole(InvalidFormat):
    code = "INVALID_ROLE"
    error = "Invalid role"
    message = "Role must be USER or ADMIN"


class InvalidPassword(InvalidFormat):
    code = "INVALID_PASSWORD"
    error = "Invalid password"
    message = "Password must be at least 6 characters long"


class InvalidCredentials(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_CREDENTIALS"
    error = "Invalid credentials"
    message = "Wrong email or password"


class NotAuthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "NOT_AUTHENTICATED"
    error = "Not authenticated"
    message = "Authentication required to access this resource"


class InvalidToken(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_TOKEN"
    error = "Invalid token"
    message = "Your session is invalid. Please log in again."


class TokenExpired(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "TOKEN_EXPIRED"
    error = "Token expired"
    message = "Your session has expired. Please log in again."


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    error = "Access denied"
    message = "You do not have permission to access this resource"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    error = "Not found"
    message = "Resource not found"


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
    error = "Conflict"
    message = "The resource already exists"


class CannotDeleteSelf(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "CANNOT_DELETE_SELF"
    error = "Cannot delete yourself"
    message = "You cannot delete your own account"


class StoreFailure(ApiError):
    code = "STORE_FAILURE"
    error = "Database error"
    message = "Unable to process the request. Please try again later."
