"""
Storage Routes

GET /storage/{bucket}/{path} - Serve a stored file (public URLs point here)
"""

from fastapi import APIRouter, HTTPException, Response

from jobportal.services.storage_service import get_storage_service, StorageError

router = APIRouter(prefix="/storage", tags=["Storage"])


@router.get("/{bucket}/{path:path}")
async def get_stored_file(bucket: str, path: str):
    try:
        stored = get_storage_service().get_file(bucket, path)
    except StorageError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if stored is None:
        raise HTTPException(status_code=404, detail="File not found")
    return Response(content=stored["content"], media_type=stored["content_type"])
