# Overview: Image uploads stored on local disk and served back under /uploads/.

from __future__ import annotations

import os
import secrets
import time

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..validation import ValidationError

DEFAULT_EXTENSION = ".jpg"
PUBLIC_PREFIX = "/uploads/"


def _unique_name(original: str | None) -> str:
    ext = os.path.splitext(secure_filename(original or ""))[1].lower() or DEFAULT_EXTENSION
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"


def save_image(file: FileStorage | None, upload_folder: str) -> str:
    """Store the upload and return its public URL."""
    if file is None or not file.filename:
        raise ValidationError("No se recibió archivo.")
    os.makedirs(upload_folder, exist_ok=True)
    name = _unique_name(file.filename)
    file.save(os.path.join(upload_folder, name))
    return PUBLIC_PREFIX + name
