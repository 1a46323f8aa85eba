"""Exception handlers for converting custom exceptions to HTTP responses."""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.app.core.exceptions import (
    IdeaBoardException,
    UnauthenticatedError,
    InvalidArgumentError,
    IdeaNotFoundError,
    AlreadyVotedError,
    TransactionAbortedError,
    UpvoteModeDisabledError,
)


async def ideaboard_exception_handler(request: Request, exc: IdeaBoardException) -> JSONResponse:
    """
    Handle all Idea Board custom exceptions and convert to appropriate HTTP responses.

    Args:
        request: The incoming request
        exc: The exception that was raised

    Returns:
        JSONResponse with appropriate status code and error details
    """
    # Map exception types to HTTP status codes
    if isinstance(exc, UnauthenticatedError):
        status_code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(exc, (InvalidArgumentError, UpvoteModeDisabledError)):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, IdeaNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (AlreadyVotedError, TransactionAbortedError)):
        status_code = status.HTTP_409_CONFLICT
    else:
        # Generic IdeaBoardException / InternalError
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(
        status_code=status_code,
        content={
            "detail": exc.message,
            "type": exc.__class__.__name__,
            "code": exc.code,
            **({"info": exc.details} if exc.details else {})
        }
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Render malformed requests (wrong JSON types, bad query values) as invalid-argument.

    Only the first validation error is reported.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    reason = first.get("msg", "Malformed request")
    if first.get("type") == "json_invalid":
        # loc ends with a character offset, not a field name
        location = ""
    else:
        location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))

    if location:
        message = f"Invalid argument '{location}': {reason}"
    else:
        message = f"Invalid request body: {reason}"

    return await ideaboard_exception_handler(
        request, InvalidArgumentError(message, argument=location or None)
    )


def register_exception_handlers(app):
    """
    Register all custom exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(IdeaBoardException, ideaboard_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
