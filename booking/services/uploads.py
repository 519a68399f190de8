import datetime
import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from rest_framework.exceptions import ValidationError


def _generated_name(filename: str) -> str:
    ext = os.path.splitext(filename or '')[1].lower()
    return f"{datetime.date.today().strftime('%Y/%m')}/{uuid.uuid4().hex}{ext}"


def store_upload(f) -> str:
    """Validate and save an uploaded file; return the stored name.

    Only the returned name is meant to be persisted, never the content.
    """
    size_mb = (f.size or 0) / (1024*1024)
    if size_mb > settings.UPLOAD_MAX_MB:
        raise ValidationError({'file': 'File too large.'})
    ctype = getattr(f, 'content_type', '') or ''
    if not any(ctype.startswith(prefix) for prefix in settings.ALLOWED_UPLOAD_TYPES):
        raise ValidationError({'file': 'Unsupported file type.'})
    return default_storage.save(_generated_name(f.name), f)
