"""
Leave proof uploads to Supabase storage.

Only the resulting public URL is kept on the leave application row.
"""

import logging
import uuid
from pathlib import PurePath

from erp.core.config import settings
from erp.core.database import get_supabase
from erp.core.exceptions import RemoteCallError, ValidationFailure

logger = logging.getLogger(__name__)

ALLOWED_PROOF_EXTENSIONS = {".pdf", ".png", ".jpg", ".jpeg"}


def validate_proof(filename: str, size: int) -> str:
    """Return the lower-cased extension, or raise ValidationFailure."""
    ext = PurePath(filename or "").suffix.lower()
    if ext not in ALLOWED_PROOF_EXTENSIONS:
        raise ValidationFailure(
            f"Unsupported file type '{ext or filename}'. Allowed: {', '.join(sorted(ALLOWED_PROOF_EXTENSIONS))}"
        )
    if size == 0:
        raise ValidationFailure("Uploaded file is empty")
    if size > settings.MAX_PROOF_BYTES:
        limit_mb = settings.MAX_PROOF_BYTES // (1024 * 1024)
        raise ValidationFailure(f"File too large. Please upload a file smaller than {limit_mb}MB")
    return ext


def upload_proof(filename: str, content: bytes, content_type: str | None = None) -> str:
    """Store the file under a random key and return its public URL."""
    ext = validate_proof(filename, len(content))
    key = f"{uuid.uuid4().hex}{ext}"
    bucket = get_supabase().storage.from_(settings.PROOF_BUCKET)

    try:
        bucket.upload(key, content, {"content-type": content_type or "application/octet-stream"})
    except Exception as e:
        logger.exception("Upload of %s to bucket %s failed", key, settings.PROOF_BUCKET)
        raise RemoteCallError(f"Upload failed: {e}") from e

    url = bucket.get_public_url(key)
    logger.info("Stored leave proof %s (%d bytes)", key, len(content))
    return url
