"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (e.g. blank comment text, bad parent)."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error (e.g. email taken, post already liked)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthenticatedError(DomainError):
    """Raised when an action requires an authenticated user and there is none."""

    def __init__(self, action: str = "perform this action"):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class ForbiddenError(DomainError):
    """Raised when an authenticated user may not act on a resource."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class InvalidCredentialsError(DomainError):
    """Raised when login credentials do not match a user."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class StoreError(DomainError):
    """Raised when the underlying store fails.

    Nothing is retried or rolled back by the domain; the caller decides.
    """

    def __init__(self, operation: str, detail: str | None = None):
        self.operation = operation
        message = f"Store operation failed: {operation}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ThreadTooDeepError(DomainError):
    """Raised when a reply thread is nested deeper than can be returned nested.

    The flat comment list has no such limit.
    """

    def __init__(self, post_id: str, depth: int, limit: int):
        self.post_id = post_id
        self.depth = depth
        self.limit = limit
        super().__init__(
            f"Thread on post {post_id} is {depth} replies deep; nested "
            f"responses stop at {limit}, use the flat comment list instead"
        )
