"""User domain models."""

from backend.app.models.common import CamelModel


class NewUser(CamelModel):
    """User creation draft."""

    username: str
    password: str


class User(CamelModel):
    """Stored user."""

    id: int
    username: str
    password: str
