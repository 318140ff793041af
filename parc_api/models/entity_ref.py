from __future__ import annotations

import uuid
from dataclasses import dataclass

from sqlalchemy import CheckConstraint, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

ENTITY_KINDS = ("equipment", "license", "ticket", "maintenance", "inventory", "employee", "user")


@dataclass(frozen=True)
class EntityKey:
    kind: str
    id: uuid.UUID


def entity_ref_check(table: str) -> CheckConstraint:
    # Both columns set, or neither.
    return CheckConstraint(
        "(entity_type IS NULL) = (entity_id IS NULL)",
        name=f"ck_{table}_entity_ref",
    )


class EntityRefMixin:
    entity_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    entity_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    @property
    def entity(self) -> EntityKey | None:
        if self.entity_type is None or self.entity_id is None:
            return None
        return EntityKey(kind=self.entity_type, id=self.entity_id)

    @entity.setter
    def entity(self, value: EntityKey | None) -> None:
        if value is None:
            self.entity_type = None
            self.entity_id = None
            return
        if value.kind not in ENTITY_KINDS:
            raise ValueError(f"Unknown entity kind: {value.kind}")
        self.entity_type = value.kind
        self.entity_id = value.id
