"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input violates length, category or value constraints."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when a user acts on content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class RateLimitedError(DomainError):
    """Raised when an author exceeds the posting quota."""

    def __init__(self, limit: int, window_hours: int):
        self.limit = limit
        self.window_hours = window_hours
        super().__init__(
            f"Posting limit reached: {limit} post(s) per {window_hours} hours"
        )


class ExpiredError(DomainError):
    """Raised when mutating a BackPage post past its expiry."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} has expired: {identifier}")


class ConflictError(DomainError):
    """Raised when a uniqueness constraint is violated."""

    pass


class DownloadLimitExceededError(DomainError):
    """Raised when a purchase has used all of its downloads."""

    def __init__(self, purchase_id: str, max_downloads: int):
        self.purchase_id = purchase_id
        self.max_downloads = max_downloads
        super().__init__(
            f"Download limit of {max_downloads} reached for purchase {purchase_id}"
        )
