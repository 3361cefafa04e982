"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys on the wire.

    Python code uses snake_case attribute names; JSON bodies use the camelCase
    aliases. Either form is accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EntityKind(str, Enum):
    """Kinds of entity held by the store."""

    user = "user"
    document = "document"
    highlight = "highlight"


class DocumentType(str, Enum):
    """Where a document's content came from."""

    url = "url"
    pdf = "pdf"
