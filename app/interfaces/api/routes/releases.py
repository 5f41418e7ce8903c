"""Routes to manage watch releases."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.releases import (
    create_release as create_release_uc,
    delete_release as delete_release_uc,
    get_release as get_release_uc,
    list_limited_edition_releases as list_limited_edition_releases_uc,
    list_releases as list_releases_uc,
    list_releases_by_brands as list_releases_by_brands_uc,
    list_releases_by_date_range as list_releases_by_date_range_uc,
    list_unnotified_releases as list_unnotified_releases_uc,
    list_upcoming_releases as list_upcoming_releases_uc,
    mark_release_notified as mark_release_notified_uc,
    update_release as update_release_uc,
)
from app.domain.entities import WatchRelease
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.database import get_db
from app.interfaces.api.schemas import WatchReleaseCreate, WatchReleaseRead, WatchReleaseUpdate

router = APIRouter(prefix="/api/watch-releases", tags=["watch-releases"])


def _to_read_model(release: WatchRelease) -> WatchReleaseRead:
    return WatchReleaseRead.model_validate(release)


def _to_read_models(releases) -> list[WatchReleaseRead]:
    return [_to_read_model(release) for release in releases]


@router.post("/", response_model=WatchReleaseRead, status_code=status.HTTP_201_CREATED)
def register_release(release_in: WatchReleaseCreate, db: Session = Depends(get_db)):
    try:
        release = create_release_uc(db, **release_in.model_dump())
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(release)


@router.get("/", response_model=list[WatchReleaseRead])
def list_releases(skip: int = Query(0, ge=0), limit: int = Query(100, ge=1, le=500), db: Session = Depends(get_db)):
    return _to_read_models(list_releases_uc(db, skip=skip, limit=limit))


@router.get("/unnotified", response_model=list[WatchReleaseRead])
def list_unnotified_releases(db: Session = Depends(get_db)):
    return _to_read_models(list_unnotified_releases_uc(db))


@router.get("/upcoming", response_model=list[WatchReleaseRead])
def list_upcoming_releases(db: Session = Depends(get_db)):
    """Return releases dated from now on, soonest first."""

    return _to_read_models(list_upcoming_releases_uc(db))


@router.get("/limited-edition", response_model=list[WatchReleaseRead])
def list_limited_edition_releases(db: Session = Depends(get_db)):
    return _to_read_models(list_limited_edition_releases_uc(db))


@router.get("/brand/{brand}", response_model=list[WatchReleaseRead])
def list_releases_by_brand(brand: str, db: Session = Depends(get_db)):
    return _to_read_models(list_releases_by_brands_uc(db, [brand]))


@router.get("/brands", response_model=list[WatchReleaseRead])
def list_releases_by_brands(
    brands: list[str] = Query(..., description="Brands to match; repeat the parameter"),
    db: Session = Depends(get_db),
):
    return _to_read_models(list_releases_by_brands_uc(db, brands))


@router.get("/date-range", response_model=list[WatchReleaseRead])
def list_releases_by_date_range(
    start_date: datetime = Query(...),
    end_date: datetime = Query(...),
    db: Session = Depends(get_db),
):
    try:
        releases = list_releases_by_date_range_uc(db, start_date, end_date)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_models(releases)


@router.get("/{release_id}", response_model=WatchReleaseRead)
def read_release(release_id: int, db: Session = Depends(get_db)):
    try:
        release = get_release_uc(db, release_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _to_read_model(release)


@router.put("/{release_id}", response_model=WatchReleaseRead)
def update_release(release_id: int, release_in: WatchReleaseUpdate, db: Session = Depends(get_db)):
    try:
        release = update_release_uc(db, release_id, **release_in.model_dump())
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(release)


@router.delete("/{release_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_release(release_id: int, db: Session = Depends(get_db)) -> Response:
    try:
        delete_release_uc(db, release_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{release_id}/mark-notified", status_code=status.HTTP_204_NO_CONTENT)
def mark_release_notified(release_id: int, db: Session = Depends(get_db)) -> Response:
    """Flag the release as notified without sending anything."""

    try:
        mark_release_notified_uc(db, release_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
