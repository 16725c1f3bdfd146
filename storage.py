"""
Local upload storage for property images.

Files live under UPLOAD_DIR and are served publicly at /uploads; the
database stores the public path ("/uploads/<filename>").
"""
import logging
import os
import re
import secrets
import time
from typing import Iterator, Tuple

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads/"
UPLOAD_DIR = os.getenv(
     "UPLOAD_DIR",
     os.path.join(os.path.dirname(os.path.abspath(__file__)), "public", "uploads"),
)


def _safe_name(filename: str) -> str:
     base = os.path.basename(filename or "image")
     base = re.sub(r"[^A-Za-z0-9._-]", "_", base.replace(" ", "_"))
     return base or "image"


def unique_filename(original_name: str) -> str:
     """<epoch-ms>-<random>-<original name>, collision resistant."""
     return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}-{_safe_name(original_name)}"


def save_upload(data: bytes, original_name: str, upload_dir: str = None) -> str:
     """
     Write an image payload to the uploads directory.

     Returns:
          Public URL path of the stored file, e.g. /uploads/1700000000000-ab12cd34-photo.jpg
     """
     upload_dir = upload_dir or UPLOAD_DIR
     os.makedirs(upload_dir, exist_ok=True)
     filename = unique_filename(original_name)
     with open(os.path.join(upload_dir, filename), "wb") as buffer:
          buffer.write(data)
     return f"{UPLOAD_URL_PREFIX}{filename}"


def path_for_url(image_url: str, upload_dir: str = None) -> str:
     """Map a stored /uploads/<file> URL back to its file path."""
     upload_dir = upload_dir or UPLOAD_DIR
     return os.path.join(upload_dir, os.path.basename(image_url))


def delete_upload(image_url: str, upload_dir: str = None) -> bool:
     """
     Best-effort removal of a stored upload.

     Returns True if a file was removed. A missing file is not an error, and
     OS errors are logged rather than raised so row deletion is never blocked.
     """
     file_path = path_for_url(image_url, upload_dir)
     try:
          os.remove(file_path)
          return True
     except FileNotFoundError:
          logger.warning("Upload already missing: %s", file_path)
     except OSError as e:
          logger.warning("Could not delete upload %s: %s", file_path, e)
     return False


def iter_uploads(upload_dir: str = None) -> Iterator[Tuple[str, float]]:
     """Yield (public URL, mtime) for every file currently in the uploads directory."""
     upload_dir = upload_dir or UPLOAD_DIR
     if not os.path.isdir(upload_dir):
          return
     for entry in os.scandir(upload_dir):
          if entry.is_file():
               yield f"{UPLOAD_URL_PREFIX}{entry.name}", entry.stat().st_mtime
