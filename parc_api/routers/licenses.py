import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..schemas.license import LicenseCreateIn, LicenseOut, LicenseUpdateIn
from ..services import license_service

router = APIRouter(prefix="/api/licenses", tags=["licenses"], dependencies=[Depends(authorize)])


@router.get("", response_model=list[LicenseOut])
def list_licenses(session: Session = Depends(get_session)):
    return license_service.list_licenses(session)


@router.get("/{license_id}", response_model=LicenseOut)
def get_license(license_id: uuid.UUID, session: Session = Depends(get_session)):
    lic = license_service.get_license(session, license_id)
    if not lic:
        raise HTTPException(status_code=404, detail="License not found")
    return lic


@router.post("", response_model=LicenseOut, status_code=201)
def create_license(payload: LicenseCreateIn, session: Session = Depends(get_session)):
    return license_service.create_license(session, payload)


@router.put("/{license_id}", response_model=LicenseOut)
def update_license(license_id: uuid.UUID, payload: LicenseUpdateIn, session: Session = Depends(get_session)):
    lic = license_service.update_license(session, license_id, payload)
    if not lic:
        raise HTTPException(status_code=404, detail="License not found")
    return lic


@router.delete("/{license_id}", status_code=204)
def delete_license(license_id: uuid.UUID, session: Session = Depends(get_session)):
    if not license_service.delete_license(session, license_id):
        raise HTTPException(status_code=404, detail="License not found")
    return Response(status_code=204)
