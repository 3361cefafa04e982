"""Request context identifying the acting user."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Request context containing the acting user's identity.

    Records created during the request are owned by ``user_id``.
    """

    user_id: int
