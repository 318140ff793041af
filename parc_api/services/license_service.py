import uuid

from sqlalchemy.orm import Session

from ..db import transaction
from ..models import License
from ..schemas.license import LicenseCreateIn, LicenseUpdateIn
from .crud import apply_patch, get_by_id, list_all

REQUIRED_FIELDS = {"name", "vendor", "type", "current_users"}


def get_license(session: Session, license_id: uuid.UUID) -> License | None:
    return get_by_id(session, License, license_id)


def list_licenses(session: Session) -> list[License]:
    return list_all(session, License)


def create_license(session: Session, payload: LicenseCreateIn) -> License:
    lic = License(**payload.model_dump())
    with transaction(session):
        session.add(lic)
    return lic


def update_license(session: Session, license_id: uuid.UUID, payload: LicenseUpdateIn) -> License | None:
    lic = get_license(session, license_id)
    if not lic:
        return None
    data = payload.model_dump(exclude_unset=True)
    for key in REQUIRED_FIELDS:
        if key in data and data[key] is None:
            data.pop(key)
    with transaction(session):
        apply_patch(lic, data)
    return lic


def delete_license(session: Session, license_id: uuid.UUID) -> bool:
    lic = get_license(session, license_id)
    if not lic:
        return False
    with transaction(session):
        session.delete(lic)
    return True
