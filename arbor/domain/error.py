"""Domain layer errors.

Every error carries a stable ``kind`` so transports can map it to their own
status codes without inspecting messages.
"""


class DomainError(Exception):
    """Base domain error."""

    kind = "internal"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidArgumentError(DomainError):
    """Malformed or missing input."""

    kind = "invalid_argument"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class CrossRootError(DomainError):
    """Raised when a reply targets a parent under a different root."""

    kind = "cross_root"

    def __init__(self, parent_id: str, parent_root_id: str, root_id: str):
        self.parent_id = parent_id
        super().__init__(
            f"Parent comment {parent_id} belongs to root {parent_root_id}, "
            f"not {root_id}"
        )


class DepthExceededError(DomainError):
    """Raised when a reply would nest deeper than allowed."""

    kind = "depth_exceeded"

    def __init__(self, parent_id: str, max_depth: int):
        self.parent_id = parent_id
        self.max_depth = max_depth
        super().__init__(
            f"Maximum comment depth {max_depth} reached under parent {parent_id}"
        )


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    kind = "unauthorized"

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class ForbiddenError(DomainError):
    """Raised when an action is never allowed for this caller (e.g. self-votes)."""

    kind = "forbidden"


class ConflictError(DomainError):
    """Raised when a write collides with a concurrent one."""

    kind = "conflict"


class UnavailableError(DomainError):
    """Raised when the backing store cannot be reached in time."""

    kind = "unavailable"
