"""Minimal auth dependency.

There are no accounts or sessions: every request acts as the default user
seeded into the store at start-up.
"""

from typing import Annotated

from fastapi import Depends

from backend.app.api.deps import get_store
from backend.app.db.context import RequestContext
from backend.app.db.repositories import EntityStore


async def get_current_context(
    store: Annotated[EntityStore, Depends(get_store)],
) -> RequestContext:
    """Resolve the request context.

    Returns:
        RequestContext for the store's default user
    """
    return RequestContext(user_id=store.default_user_id)
