import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..schemas.user import UserCreateIn, UserOut, UserUpdateIn
from ..services import user_service

router = APIRouter(prefix="/api/users", tags=["users"], dependencies=[Depends(authorize)])


@router.get("", response_model=list[UserOut])
def list_users(session: Session = Depends(get_session)):
    return user_service.list_users(session)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: uuid.UUID, session: Session = Depends(get_session)):
    user = user_service.get_user(session, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("", response_model=UserOut, status_code=201)
def create_user(payload: UserCreateIn, session: Session = Depends(get_session)):
    return user_service.create_user_from_input(session, payload)


@router.put("/{user_id}", response_model=UserOut)
def update_user(user_id: uuid.UUID, payload: UserUpdateIn, session: Session = Depends(get_session)):
    user = user_service.update_user(session, user_id, payload)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: uuid.UUID, session: Session = Depends(get_session)):
    # Users are disabled, never hard deleted.
    if not user_service.disable_user(session, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return Response(status_code=204)
