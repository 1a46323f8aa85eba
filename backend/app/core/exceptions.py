"""Custom exception classes for the Idea Board application.

Every exception carries a stable ``code`` matching the remote-procedure error
codes the callable endpoints expose to clients.
"""


class IdeaBoardException(Exception):
    """Base exception for all Idea Board errors."""

    code = "internal"

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class UnauthenticatedError(IdeaBoardException):
    """Raised when an operation requires a signed-in caller and there is none."""

    code = "unauthenticated"

    def __init__(self, message: str = "User must be authenticated."):
        super().__init__(
            message=message,
            details="Sign in anonymously via /api/auth/anonymous and send the bearer token"
        )


class InvalidArgumentError(IdeaBoardException):
    """Raised when a request argument is missing or malformed."""

    code = "invalid-argument"

    def __init__(self, message: str, argument: str | None = None):
        super().__init__(message=message)
        self.argument = argument


class IdeaNotFoundError(IdeaBoardException):
    """Raised when an idea is not found."""

    code = "not-found"

    def __init__(self, idea_id: str):
        super().__init__(
            message=f"Idea not found: {idea_id}",
            details="The idea may have been deleted. Refresh the list before retrying"
        )
        self.idea_id = idea_id


class AlreadyVotedError(IdeaBoardException):
    """Raised when a user upvotes the same idea a second time."""

    code = "already-exists"

    def __init__(self, idea_id: str, user_id: str):
        super().__init__(
            message="User has already upvoted this idea.",
            details=f"Vote for idea {idea_id} is already recorded"
        )
        self.idea_id = idea_id
        self.user_id = user_id


class TransactionAbortedError(IdeaBoardException):
    """Raised when a transaction keeps conflicting with concurrent writers."""

    code = "aborted"

    def __init__(self, attempts: int):
        super().__init__(
            message=f"Transaction aborted after {attempts} conflicting attempts",
            details="The idea is under heavy contention. Try again in a moment"
        )
        self.attempts = attempts


class UpvoteModeDisabledError(IdeaBoardException):
    """Raised when the upvote entry point of the inactive mechanism is called."""

    code = "failed-precondition"

    def __init__(self, requested: str, active: str):
        super().__init__(
            message=f"Upvote mode '{requested}' is disabled on this server",
            details=f"Use the '{active}' upvote endpoint instead"
        )
        self.requested = requested
        self.active = active


class InternalError(IdeaBoardException):
    """Raised when the store fails in an unexpected way."""

    code = "internal"

    def __init__(self, operation: str, original_error: Exception | None = None):
        message = f"An error occurred while {operation}."
        super().__init__(
            message=message,
            details="The idea store is temporarily unavailable"
        )
        self.operation = operation
        self.original_error = original_error
