from fastapi import APIRouter, Depends, Response, status

from roam.db.dal import Database
from roam.models.document import Document, DocumentIn
from roam.routers.deps import get_db
from roam.services.status_pipeline import load_trip

router = APIRouter(tags=["documents"])


@router.get(
    "/trips/{trip_id}/documents",
    response_model=list[Document],
    summary="List trip documents",
)
async def list_documents(trip_id: int, db: Database = Depends(get_db)):
    load_trip(db, trip_id)
    return [Document(**row) for row in db.list_documents(trip_id)]


@router.post(
    "/trips/{trip_id}/documents",
    response_model=Document,
    status_code=status.HTTP_201_CREATED,
    summary="Attach a transport, stay or activity document",
)
async def create_document(
    trip_id: int, payload: DocumentIn, db: Database = Depends(get_db)
):
    document_id = db.insert_document(
        trip_id,
        type=payload.type,
        title=payload.title,
        subtitle=payload.subtitle,
        link=payload.link,
    )
    return Document(id=document_id, trip_id=trip_id, **payload.model_dump())


@router.delete(
    "/documents/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a document",
)
async def delete_document(document_id: int, db: Database = Depends(get_db)):
    db.delete_document(document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
