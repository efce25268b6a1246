"""Admin gate shared by moderation use cases."""

import logfire

from undead.domain.error import NotAuthorizedError
from undead.domain.value import Principal


def require_admin(principal: Principal, resource: str, resource_id: str) -> None:
    """Raise NotAuthorizedError unless the principal is a moderator."""
    if not principal.is_admin:
        logfire.warn(
            "Non-admin attempted moderation",
            user_id=str(principal.user_id),
            resource=resource,
        )
        raise NotAuthorizedError(resource, resource_id, str(principal.user_id))
