"""
Error types for the upload pipeline and file access, plus HTTP translation.
"""

import logging
from typing import Any, Dict, Optional, Union, Callable
from functools import wraps
from datetime import datetime, timezone

from fastapi import HTTPException
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error class."""

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        status_code: int = 500,
        details: Optional[Dict] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.user_message = user_message or message
        self.timestamp = datetime.now(timezone.utc).isoformat()


class InvalidFile(AppError):
    """The transport marked the upload invalid, or its size is unreadable."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            code="INVALID_FILE",
            status_code=422,
            **kwargs
        )


class InvalidUpload(AppError):
    """The upload stream could not be read or the disk refused the write."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            code="INVALID_UPLOAD",
            status_code=500,
            **kwargs
        )


class UploadFailed(AppError):
    """
    Single failure kind surfaced by FileUploader.store().

    The wrapped error's code is kept in details["code"].
    """

    def __init__(self, message: str, original_code: Optional[Any] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if original_code is not None:
            details["code"] = original_code
        super().__init__(
            message,
            code="UPLOAD_FAILED",
            status_code=500,
            details=details,
            **kwargs
        )
        self.original_code = original_code


class MissingFile(AppError):
    """The disk reports that the requested path does not exist."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            code="MISSING_FILE",
            status_code=404,
            **kwargs
        )


class StorageError(AppError):
    """Error with file storage operations."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            code="STORAGE_ERROR",
            status_code=507,
            **kwargs
        )


def error_response(error: Union[AppError, Exception]) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        error: The error to convert to response

    Returns:
        JSONResponse with error details
    """
    if isinstance(error, AppError):
        content = {
            "error": {
                "code": error.code,
                "message": error.user_message,
                "details": error.details,
                "timestamp": error.timestamp
            }
        }
        status_code = error.status_code
    else:
        content = {
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        }
        status_code = 500

        logger.error(f"Unhandled error: {str(error)}", exc_info=True)

    return JSONResponse(
        status_code=status_code,
        content=content
    )


def handle_errors(
    fallback_message: str = "Operation failed",
    log_errors: bool = True
):
    """
    Decorator translating AppError into HTTPException for sync route handlers.

    Args:
        fallback_message: Message to use for unexpected errors
        log_errors: Whether to log errors
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppError as e:
                if log_errors:
                    logger.warning(f"{e.code}: {e.message}", extra={"details": e.details})
                raise HTTPException(
                    status_code=e.status_code,
                    detail={
                        "code": e.code,
                        "message": e.user_message,
                        "details": e.details
                    }
                )
            except HTTPException:
                raise
            except Exception as e:
                if log_errors:
                    logger.error(f"Unhandled error in {func.__name__}: {str(e)}", exc_info=True)
                raise HTTPException(
                    status_code=500,
                    detail={
                        "code": "INTERNAL_ERROR",
                        "message": fallback_message
                    }
                )

        return wrapper

    return decorator
