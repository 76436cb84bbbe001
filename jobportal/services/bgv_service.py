"""
Background Verification (BGV) document checklist.
"""

from sqlalchemy import text
from sqlalchemy.orm import Session

DEFAULT_BGV_DOCUMENTS = [
    "Aadhaar Card",
    "PAN Card",
    "Education Certificate",
    "Experience Letter",
    "Address Proof",
]


def create_default_documents(db: Session, candidate_id: int) -> None:
    """Create the not-yet-uploaded checklist for a new candidate."""
    for document_type in DEFAULT_BGV_DOCUMENTS:
        db.execute(
            text("""
                INSERT INTO bgv_documents (candidate_id, document_type, status)
                VALUES (:cid, :dtype, 'not_uploaded')
                ON CONFLICT (candidate_id, document_type) DO NOTHING
            """),
            {"cid": candidate_id, "dtype": document_type}
        )
