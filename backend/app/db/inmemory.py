"""In-memory implementation of the entity store."""

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, cast

from backend.app.db.repositories import Draft, Record
from backend.app.db.sequences import SequenceAllocator
from backend.app.models.common import EntityKind
from backend.app.models.docs import Document, NewDocument
from backend.app.models.highlights import Highlight, NewHighlight
from backend.app.models.users import NewUser, User

logger = logging.getLogger(__name__)

# Id the seed user receives on a fresh store
DEFAULT_USER_ID = 1

_RECORD_TYPES: dict[EntityKind, tuple[type[Draft], type[Record]]] = {
    EntityKind.user: (NewUser, User),
    EntityKind.document: (NewDocument, Document),
    EntityKind.highlight: (NewHighlight, Highlight),
}

# Creation timestamp attribute per kind (users have none)
_CREATED_FIELD: dict[EntityKind, str | None] = {
    EntityKind.user: None,
    EntityKind.document: "added_at",
    EntityKind.highlight: "created_at",
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InMemoryEntityStore:
    """In-memory implementation of EntityStore.

    One map per entity kind, keyed by an id from a SequenceAllocator. Allocation
    and the map write happen under the kind's lock so two inserts can never
    race to the same id. Nothing survives a process restart.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize an empty store.

        Args:
            clock: Source of creation timestamps (default: current UTC time)
        """
        self._clock = clock or _utcnow
        self._ids = SequenceAllocator()
        self._records: dict[EntityKind, dict[int, Record]] = {kind: {} for kind in EntityKind}
        self._locks: dict[EntityKind, threading.Lock] = {
            kind: threading.Lock() for kind in EntityKind
        }
        self.default_user_id = DEFAULT_USER_ID

    def insert(self, kind: EntityKind, draft: Draft) -> Record:
        """Store a new record built from ``draft``."""
        draft_type, record_type = _RECORD_TYPES[kind]
        if not isinstance(draft, draft_type):
            raise TypeError(
                f"{kind.value} store expects {draft_type.__name__}, got {type(draft).__name__}"
            )

        with self._locks[kind]:
            record_id = self._ids.next(kind)
            record = record_type(**self._fill_defaults(kind, record_id, draft))
            self._records[kind][record_id] = record

        logger.debug("Inserted %s %d", kind.value, record_id)
        return record.model_copy(deep=True)

    def get_by_id(self, kind: EntityKind, record_id: int) -> Record | None:
        """Get a record by id."""
        record = self._records[kind].get(record_id)

        if record is None:
            return None

        return record.model_copy(deep=True)

    def list_by_parent(self, kind: EntityKind, parent_field: str, parent_id: int) -> list[Record]:
        """List records whose ``parent_field`` equals ``parent_id``, newest first."""
        _, record_type = _RECORD_TYPES[kind]
        if parent_field not in record_type.model_fields:
            raise ValueError(f"{record_type.__name__} has no field {parent_field!r}")

        with self._locks[kind]:
            records = list(self._records[kind].values())

        results = [r for r in records if getattr(r, parent_field) == parent_id]

        # Sort by creation time descending; later ids win ties
        created_field = _CREATED_FIELD[kind]
        if created_field is None:
            results.sort(key=lambda r: r.id, reverse=True)
        else:
            results.sort(key=lambda r: (getattr(r, created_field), r.id), reverse=True)

        return [r.model_copy(deep=True) for r in results]

    def get_user_by_username(self, username: str) -> User | None:
        """Get a user by username."""
        for user in list(self._records[EntityKind.user].values()):
            if isinstance(user, User) and user.username == username:
                return user.model_copy(deep=True)
        return None

    def seed(self, username: str, password: str) -> User:
        """Create the default user if missing and make it the default owner."""
        user = self.get_user_by_username(username)

        if user is None:
            draft = NewUser(username=username, password=password)
            user = cast(User, self.insert(EntityKind.user, draft))
            logger.info("Seeded default user %r with id %d", username, user.id)

        self.default_user_id = user.id
        return user

    def _fill_defaults(self, kind: EntityKind, record_id: int, draft: Draft) -> dict[str, Any]:
        """Build the full field set for a new record.

        This is the only place defaults are applied: the id, the owning user
        when the draft leaves it unset, and the creation timestamp. Optional
        draft fields already default to None.
        """
        fields = draft.model_dump()
        fields["id"] = record_id

        if "user_id" in fields and fields["user_id"] is None:
            fields["user_id"] = self.default_user_id

        created_field = _CREATED_FIELD[kind]
        if created_field is not None:
            fields[created_field] = self._clock()

        return fields
