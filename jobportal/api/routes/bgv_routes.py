"""
Background Verification Routes

GET  /bgv/documents                 - Candidate's document checklist
POST /bgv/documents/{id}/upload     - Upload a document (status -> pending)
GET  /bgv/pending                   - Documents waiting for review (admin)
PUT  /bgv/documents/{id}/review     - Verify or reject a document (admin)
"""

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File, Request
from sqlalchemy import text
from typing import List

from jobportal.db.database import get_db_session, execute_raw_sql, fetch_one
from jobportal.core.auth import get_current_candidate, get_current_admin
from jobportal.services.audit_service import record_action
from jobportal.services.storage_service import get_storage_service
from jobportal.utils.file_upload import read_upload, DOCUMENT_EXTENSIONS
from jobportal.schemas.schemas import BGVDocumentResponse, BGVReview

router = APIRouter(prefix="/bgv", tags=["Background Verification"])

DOCUMENT_SELECT = """
    SELECT document_id, candidate_id, document_type, status, file_url, uploaded_at, review_comment
    FROM bgv_documents
"""


@router.get("/documents", response_model=List[BGVDocumentResponse])
async def get_documents(candidate: dict = Depends(get_current_candidate)):
    rows = execute_raw_sql(
        DOCUMENT_SELECT + " WHERE candidate_id = :cid ORDER BY document_id",
        {"cid": candidate["user_id"]}
    )
    return [BGVDocumentResponse(**r) for r in rows]


@router.post("/documents/{document_id}/upload", response_model=BGVDocumentResponse)
async def upload_document(
    document_id: int,
    file: UploadFile = File(..., description="PDF or image scan"),
    candidate: dict = Depends(get_current_candidate)
):
    """Upload (or re-upload) a document. It goes back to pending review."""
    row = fetch_one(
        "SELECT document_id FROM bgv_documents WHERE document_id = :did AND candidate_id = :cid",
        {"did": document_id, "cid": candidate["user_id"]}
    )
    if not row:
        raise HTTPException(status_code=404, detail="Document not found")

    content, ext, content_type = await read_upload(file, DOCUMENT_EXTENSIONS)
    url = get_storage_service().upload_file(
        "bgv", f"{candidate['user_id']}/{document_id}{ext}", content, content_type
    )

    with get_db_session() as db:
        db.execute(
            text("""
                UPDATE bgv_documents
                SET status = 'pending', file_url = :url, uploaded_at = CURRENT_TIMESTAMP,
                    reviewed_by = NULL, review_comment = NULL
                WHERE document_id = :did
            """),
            {"did": document_id, "url": url}
        )

    return BGVDocumentResponse(**fetch_one(DOCUMENT_SELECT + " WHERE document_id = :did", {"did": document_id}))


@router.get("/pending", response_model=List[BGVDocumentResponse])
async def get_pending_documents(admin: dict = Depends(get_current_admin)):
    rows = execute_raw_sql(DOCUMENT_SELECT + " WHERE status = 'pending' ORDER BY uploaded_at, document_id")
    return [BGVDocumentResponse(**r) for r in rows]


@router.put("/documents/{document_id}/review", response_model=BGVDocumentResponse)
async def review_document(
    document_id: int,
    review: BGVReview,
    request: Request,
    admin: dict = Depends(get_current_admin)
):
    """Only uploaded (pending) documents can be reviewed."""
    with get_db_session() as db:
        result = db.execute(text("SELECT status FROM bgv_documents WHERE document_id = :did"), {"did": document_id})
        row = result.fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="Document not found")
        if row[0] != "pending":
            raise HTTPException(status_code=400, detail=f"Document is {row[0]}, nothing to review")

        db.execute(
            text("""
                UPDATE bgv_documents SET status = :status, reviewed_by = :admin, review_comment = :comment
                WHERE document_id = :did
            """),
            {"did": document_id, "status": review.status.value, "admin": admin["user_id"], "comment": review.comment}
        )

    record_action("BGV Review", actor_id=admin["user_id"], actor_email=admin["email"],
                  target=f"bgv_document:{document_id}:{review.status.value}",
                  ip_address=request.client.host if request.client else None)
    return BGVDocumentResponse(**fetch_one(DOCUMENT_SELECT + " WHERE document_id = :did", {"did": document_id}))
