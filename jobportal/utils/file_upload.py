"""
File Upload Utility - validate uploads and extract text from resumes.

Supported resume formats:
- PDF (.pdf) using PyPDF2
- Word (.docx) using python-docx
- Plain Text (.txt)

Images are accepted for avatars and BGV documents.
"""

import io
from typing import Tuple, Set

from docx import Document
from fastapi import UploadFile, HTTPException
from PyPDF2 import PdfReader

from jobportal.core.config import get_settings

settings = get_settings()

RESUME_EXTENSIONS = {'.pdf', '.docx', '.txt'}
AVATAR_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.webp'}
DOCUMENT_EXTENSIONS = {'.pdf', '.png', '.jpg', '.jpeg'}

CONTENT_TYPES = {
    '.pdf': 'application/pdf',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    '.txt': 'text/plain',
    '.png': 'image/png',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.webp': 'image/webp',
}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


async def read_upload(file: UploadFile, allowed_extensions: Set[str]) -> Tuple[bytes, str, str]:
    """
    Read and validate an uploaded file.

    Returns:
        Tuple of (content, extension, content_type)

    Raises:
        HTTPException on validation errors
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = get_file_extension(file.filename)
    if ext not in allowed_extensions:
        allowed = ", ".join(sorted(e.lstrip('.').upper() for e in allowed_extensions))
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: {allowed}"
        )

    content = await file.read()

    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {settings.max_upload_mb}MB"
        )
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    return content, ext, CONTENT_TYPES[ext]


def extract_text(content: bytes, ext: str) -> str:
    """
    Extract text from resume bytes.

    Raises:
        HTTPException when nothing readable comes out
    """
    if ext == '.pdf':
        text = extract_from_pdf(content)
    elif ext == '.docx':
        text = extract_from_docx(content)
    else:  # .txt
        text = extract_from_txt(content)

    if not text.strip():
        raise HTTPException(
            status_code=400,
            detail="Could not extract text from file. File may be empty or corrupted."
        )
    return text


def extract_from_pdf(content: bytes) -> str:
    """Extract text from PDF bytes."""
    try:
        reader = PdfReader(io.BytesIO(content))
        text_parts = []
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        return '\n'.join(text_parts)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Error reading PDF: {str(e)}")


def extract_from_docx(content: bytes) -> str:
    """Extract text from DOCX bytes."""
    try:
        doc = Document(io.BytesIO(content))
        text_parts = []

        # Extract paragraphs
        for para in doc.paragraphs:
            if para.text.strip():
                text_parts.append(para.text)

        # Extract tables
        for table in doc.tables:
            for row in table.rows:
                row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if row_text:
                    text_parts.append(' | '.join(row_text))

        return '\n'.join(text_parts)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Error reading DOCX: {str(e)}")


def extract_from_txt(content: bytes) -> str:
    """Extract text from TXT bytes."""
    for encoding in ['utf-8', 'cp1252']:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    # latin-1 maps every byte, so this always succeeds
    return content.decode('latin-1')


def get_supported_formats() -> dict:
    """Get info about supported resume formats."""
    return {
        "supported_formats": [
            {"extension": ".pdf", "name": "PDF"},
            {"extension": ".docx", "name": "Word Document"},
            {"extension": ".txt", "name": "Plain Text"}
        ],
        "max_size_mb": settings.max_upload_mb
    }
