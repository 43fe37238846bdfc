"""
Shared pieces of the HirePath data models.

Timestamps are kept as naive UTC datetimes throughout, matching what
PyMongo returns from a default-configured client.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, the form MongoDB hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValueError(f"Invalid ObjectId: {value!r}")


# Stays an ObjectId for MongoDB, becomes a string in JSON output
PyObjectId = Annotated[
    ObjectId,
    BeforeValidator(parse_object_id),
    PlainSerializer(str, return_type=str, when_used="json"),
]


class EmbeddedModel(BaseModel):
    """Base for snapshots and subdocuments that carry no ObjectId of their own."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )


class BaseDocument(BaseModel):
    """A document this service owns: ObjectId key plus created/updated stamps."""

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
    )

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def model_dump_mongo(self) -> dict[str, Any]:
        """Dict ready for ``insert_one``/``replace_one``; an unset ``_id`` is left out."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        if data.get("_id") is None:
            data.pop("_id", None)
        return data
