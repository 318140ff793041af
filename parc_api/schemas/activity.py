import uuid
from datetime import datetime

from .common import ApiModel, EntityRef


class ActivityOut(ApiModel):
    id: uuid.UUID
    type: str
    title: str
    description: str
    status: str
    entity: EntityRef | None = None
    created_at: datetime
