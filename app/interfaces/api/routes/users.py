"""Routes to manage notification subscribers."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.users import (
    create_user as create_user_uc,
    delete_user as delete_user_uc,
    get_user as get_user_uc,
    get_user_by_email as get_user_by_email_uc,
    list_active_users as list_active_users_uc,
    list_users as list_users_uc,
    list_users_by_channel as list_users_by_channel_uc,
    list_users_by_preferences as list_users_by_preferences_uc,
    update_user as update_user_uc,
)
from app.domain.entities import NotificationChannel, User
from app.domain.exceptions import DuplicateEmailError, NotFoundError, ValidationError
from app.infrastructure.database import get_db
from app.interfaces.api.schemas import UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


def _error_status(exc: ValueError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, DuplicateEmailError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    """Register a new subscriber with their channel opt-ins and preferences."""

    try:
        user = create_user_uc(db, **user_in.model_dump())
    except ValidationError as exc:
        raise HTTPException(status_code=_error_status(exc), detail=str(exc)) from exc
    return _to_read_model(user)


@router.get("/", response_model=list[UserRead])
def list_users(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1, le=500), db: Session = Depends(get_db)):
    return [_to_read_model(user) for user in list_users_uc(db, skip=skip, limit=limit)]


@router.get("/active", response_model=list[UserRead])
def list_active_users(db: Session = Depends(get_db)):
    return [_to_read_model(user) for user in list_active_users_uc(db)]


@router.get("/email-notifications", response_model=list[UserRead])
def list_email_subscribers(db: Session = Depends(get_db)):
    return [_to_read_model(user) for user in list_users_by_channel_uc(db, NotificationChannel.EMAIL)]


@router.get("/sms-notifications", response_model=list[UserRead])
def list_sms_subscribers(db: Session = Depends(get_db)):
    return [_to_read_model(user) for user in list_users_by_channel_uc(db, NotificationChannel.SMS)]


@router.get("/push-notifications", response_model=list[UserRead])
def list_push_subscribers(db: Session = Depends(get_db)):
    return [_to_read_model(user) for user in list_users_by_channel_uc(db, NotificationChannel.PUSH)]


@router.get("/preferences", response_model=list[UserRead])
def list_users_by_preferences(
    categories: list[str] = Query(..., description="Preference tags to match; repeat the parameter"),
    db: Session = Depends(get_db),
):
    """Return active users sharing at least one of the given preferences."""

    return [_to_read_model(user) for user in list_users_by_preferences_uc(db, categories)]


@router.get("/email/{email}", response_model=UserRead)
def read_user_by_email(email: str, db: Session = Depends(get_db)):
    try:
        user = get_user_by_email_uc(db, email)
    except ValueError as exc:
        raise HTTPException(status_code=_error_status(exc), detail=str(exc)) from exc
    return _to_read_model(user)


@router.get("/{user_id}", response_model=UserRead)
def read_user(user_id: int, db: Session = Depends(get_db)):
    try:
        user = get_user_uc(db, user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _to_read_model(user)


@router.put("/{user_id}", response_model=UserRead)
def update_user(user_id: int, user_in: UserUpdate, db: Session = Depends(get_db)):
    try:
        user = update_user_uc(db, user_id=user_id, **user_in.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=_error_status(exc), detail=str(exc)) from exc
    return _to_read_model(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)) -> Response:
    try:
        delete_user_uc(db, user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    logger.info("User %s removed through the API", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
