"""
Image Store - ordered image attachments per property.

The representative image of a property is the attachment with the lowest
image_id. Files are written through storage.py; rows and files are not
written two-phase, so a crash between the two can leave a file with no row.
sweep_orphan_files() removes those.
"""
import logging
import os
import time
from typing import List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

import storage
from errors import ValidationError
from models import PropertyImage
from schemas.property import ImageUpload

logger = logging.getLogger(__name__)

MAX_IMAGES = int(os.getenv("MAX_IMAGES", "5"))
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(2 * 1024 * 1024)))
ORPHAN_MIN_AGE_SECONDS = 300


def validate_uploads(uploads: Sequence[ImageUpload]) -> None:
     """
     Check count, size and MIME type of a batch of image payloads.

     Raises:
          ValidationError: more than MAX_IMAGES, any file over MAX_IMAGE_BYTES,
               or any non-image content type
     """
     if len(uploads) > MAX_IMAGES:
          raise ValidationError(
               f"At most {MAX_IMAGES} images are allowed, got {len(uploads)}",
               field="images"
          )
     for upload in uploads:
          if not (upload.content_type or "").startswith("image/"):
               raise ValidationError(
                    f"Only images are allowed: {upload.filename} is {upload.content_type}",
                    field="images"
               )
          if upload.size > MAX_IMAGE_BYTES:
               raise ValidationError(
                    f"{upload.filename} exceeds the {MAX_IMAGE_BYTES // (1024 * 1024)}MB limit",
                    field="images"
               )


class ImageStore:
     """Persistence for PropertyImage rows and their backing files."""

     @staticmethod
     def attach_images(
          db: Session,
          property_id: int,
          uploads: Sequence[ImageUpload],
          written: Optional[List[str]] = None
     ) -> List[PropertyImage]:
          """
          Save each payload to disk and record it, in the given order.

          Args:
               db: SQLAlchemy database session
               property_id: owning property
               uploads: up to MAX_IMAGES image payloads
               written: if given, every stored URL is appended so the caller can
                    clean up files when its transaction rolls back

          Returns:
               The created PropertyImage rows, image_id ascending
          """
          validate_uploads(uploads)

          images = []
          for upload in uploads:
               image_url = storage.save_upload(upload.data, upload.filename)
               if written is not None:
                    written.append(image_url)
               image = PropertyImage(property_id=property_id, image_url=image_url)
               db.add(image)
               # Flush one at a time so image_id follows upload order
               db.flush()
               images.append(image)
          return images

     @staticmethod
     def list_images(db: Session, property_id: int) -> List[PropertyImage]:
          return (
               db.query(PropertyImage)
               .filter(PropertyImage.property_id == property_id)
               .order_by(PropertyImage.image_id)
               .all()
          )

     @staticmethod
     def representative_image(db: Session, property_id: int) -> Optional[str]:
          """image_url of the lowest image_id attachment, or None."""
          row = (
               db.query(PropertyImage.image_url)
               .filter(PropertyImage.property_id == property_id)
               .order_by(PropertyImage.image_id)
               .first()
          )
          return row.image_url if row else None

     @staticmethod
     def representative_image_subquery():
          """
          (property_id, image_id) of each property's representative image.

          Outer-join this, then PropertyImage on image_id, to get one image per
          property without dropping properties that have none.
          """
          return (
               select(
                    PropertyImage.property_id.label("property_id"),
                    func.min(PropertyImage.image_id).label("image_id")
               )
               .group_by(PropertyImage.property_id)
               .subquery("first_image")
          )

     @staticmethod
     def delete_all_images(db: Session, property_id: int, cleanup_files: bool = True) -> List[str]:
          """
          Delete every image row of a property.

          Returns the URLs that were removed. When cleanup_files is true the
          files are removed best-effort; pass False to defer until after commit.
          """
          urls = [image.image_url for image in ImageStore.list_images(db, property_id)]
          (
               db.query(PropertyImage)
               .filter(PropertyImage.property_id == property_id)
               .delete(synchronize_session=False)
          )
          if cleanup_files:
               ImageStore.remove_files(urls)
          return urls

     @staticmethod
     def remove_files(urls: Sequence[str]) -> None:
          """Best-effort file removal; failures are logged by storage.delete_upload."""
          for url in urls:
               storage.delete_upload(url)

     @staticmethod
     def sweep_orphan_files(
          db: Session,
          dry_run: bool = False,
          min_age_seconds: float = ORPHAN_MIN_AGE_SECONDS
     ) -> List[str]:
          """
          Remove upload files that no PropertyImage row references.

          Files younger than min_age_seconds are skipped: their row may belong
          to a transaction that has not committed yet.

          Returns the orphaned URLs found (deleted unless dry_run).
          """
          cutoff = time.time() - min_age_seconds
          referenced = {row.image_url for row in db.query(PropertyImage.image_url).all()}
          orphans = [
               url
               for url, mtime in storage.iter_uploads()
               if url not in referenced and mtime <= cutoff
          ]
          for url in orphans:
               if dry_run:
                    logger.info("Orphaned upload: %s", url)
               elif storage.delete_upload(url):
                    logger.info("Removed orphaned upload: %s", url)
          return orphans

