"""Repository protocol interfaces for data access."""

from typing import Protocol, TypeAlias

from backend.app.models.common import EntityKind
from backend.app.models.docs import Document, NewDocument
from backend.app.models.highlights import Highlight, NewHighlight
from backend.app.models.users import NewUser, User

Draft: TypeAlias = NewUser | NewDocument | NewHighlight
Record: TypeAlias = User | Document | Highlight


class EntityStore(Protocol):
    """Keyed storage for users, documents and highlights.

    Records are write-once: there is no update and no delete.
    """

    # Owner assigned to drafts that leave user_id unset
    default_user_id: int

    def insert(self, kind: EntityKind, draft: Draft) -> Record:
        """Store a new record built from ``draft``.

        Args:
            kind: Entity kind the draft belongs to
            draft: Caller-supplied fields; the store fills id, owner and
                creation timestamp

        Returns:
            A copy of the stored record
        """
        ...

    def get_by_id(self, kind: EntityKind, record_id: int) -> Record | None:
        """Get a record by id.

        Args:
            kind: Entity kind
            record_id: Record id

        Returns:
            A copy of the record, or None if no such id was ever issued
        """
        ...

    def list_by_parent(self, kind: EntityKind, parent_field: str, parent_id: int) -> list[Record]:
        """List records whose ``parent_field`` equals ``parent_id``.

        Args:
            kind: Entity kind
            parent_field: Foreign key attribute, e.g. "user_id" or "document_id"
            parent_id: Value to match

        Returns:
            Matching records, most recently created first
        """
        ...

    def get_user_by_username(self, username: str) -> User | None:
        """Get a user by username.

        Args:
            username: Unique username

        Returns:
            User or None if not found
        """
        ...

    def seed(self, username: str, password: str) -> User:
        """Create the default user if missing and make it the default owner.

        Args:
            username: Seed username
            password: Seed password

        Returns:
            The default user
        """
        ...
