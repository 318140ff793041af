import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..models.entity_ref import EntityKey


class ApiModel(BaseModel):
    """JSON bodies use camelCase; snake_case is accepted on input too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


EntityKind = Literal["equipment", "license", "ticket", "maintenance", "inventory", "employee", "user"]


class EntityRef(ApiModel):
    kind: EntityKind
    id: uuid.UUID

    def to_key(self) -> EntityKey:
        return EntityKey(kind=self.kind, id=self.id)

