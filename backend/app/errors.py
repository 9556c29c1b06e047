"""
Application Errors

Every failure a request can hit is one of these classes. Handlers registered in
app.main turn them into a JSON body of the form {"error": message} with the
matching HTTP status.

Hierarchy:
    AppError
    ├── ValidationError        400  missing/blank field, bad enum value, bad upload
    ├── OriginRejectedError    403  browser origin not on the allow-list
    ├── NotFoundError          404  no row for the identifier
    ├── StorageError           500  database connectivity or query failure
    ├── UploadError            500  disk write failure
    └── DeadlineExceededError  504  storage statement or upload took too long
"""

from typing import Optional

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class OriginRejectedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Origin not allowed"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StorageError(AppError):
    default_message = "DB error"


class UploadError(AppError):
    default_message = "Upload failed"


class DeadlineExceededError(AppError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    default_message = "Deadline exceeded"
