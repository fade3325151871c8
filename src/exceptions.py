"""
Custom exception classes and error handling.

This module provides custom exceptions and utilities for consistent
error handling across the application.
"""
import logging
from typing import Any, Dict, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RateMySpeakException(Exception):
    """Base exception for all RateMySpeak-specific errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(RateMySpeakException):
    """Raised when a required credential or setting is missing."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


class AnalysisCallError(RateMySpeakException):
    """Raised when an analysis call to the model fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY, details)


class ValidationError(AnalysisCallError):
    """Raised when a model response is missing required fields or is malformed."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.field = field


# =============================================================================
# Exception Handlers
# =============================================================================

async def ratemyspeak_exception_handler(request: Request, exc: RateMySpeakException) -> JSONResponse:
    """Handle RateMySpeakException instances."""
    logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "details": exc.details
        }
    )


def register_exception_handlers(app):
    """
    Register all custom exception handlers with the FastAPI app.

    Call this during app initialization:
        from src.exceptions import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(RateMySpeakException, ratemyspeak_exception_handler)
