from typing import Annotated, Any

from bson import ObjectId
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    SerializerFunctionWrapHandler,
    WithJsonSchema,
    model_serializer,
)


def parse_object_id(value: Any) -> ObjectId:
    """Coerce a stored ObjectId or its 24-character hex form."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValueError(f"Invalid ObjectId: {value!r}")


# Native ObjectId in python mode (what the driver stores), hex string in JSON.
ObjectIdField = Annotated[
    ObjectId,
    PlainValidator(parse_object_id),
    PlainSerializer(str, when_used="json"),
    WithJsonSchema({"type": "string", "pattern": "^[0-9a-fA-F]{24}$"}),
]


class Entity(BaseModel):
    """Base class for stored document nodes.

    Every node may carry an ``_id``. It is absent until the persistence layer
    assigns one, and an absent id is omitted from dumps rather than written as
    ``null``.
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: ObjectIdField | None = Field(
        default=None,
        alias="_id",
        description="Storage identifier, absent until assigned",
    )

    @model_serializer(mode="wrap")
    def _omit_missing_id(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.id is None:
            data.pop("_id", None)
            data.pop("id", None)
        return data
