import time

from fastapi import APIRouter, Depends, Response, status

from roam.db.dal import Database
from roam.models.photo import Photo, PhotoIn
from roam.routers.deps import get_db
from roam.services.status_pipeline import load_trip

router = APIRouter(tags=["photos"])


@router.get(
    "/trips/{trip_id}/photos",
    response_model=list[Photo],
    summary="List trip photos (newest first)",
)
async def list_photos(trip_id: int, db: Database = Depends(get_db)):
    load_trip(db, trip_id)
    return [Photo(**row) for row in db.list_photos(trip_id)]


@router.post(
    "/trips/{trip_id}/photos",
    response_model=Photo,
    status_code=status.HTTP_201_CREATED,
    summary="Attach a photo URI",
)
async def create_photo(trip_id: int, payload: PhotoIn, db: Database = Depends(get_db)):
    created_at = int(time.time() * 1000)
    photo_id = db.insert_photo(
        trip_id, uri=payload.uri, caption=payload.caption, created_at=created_at
    )
    return Photo(id=photo_id, trip_id=trip_id, created_at=created_at, **payload.model_dump())


@router.delete(
    "/photos/{photo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a photo",
)
async def delete_photo(photo_id: int, db: Database = Depends(get_db)):
    db.delete_photo(photo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
