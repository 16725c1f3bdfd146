"""Tests for image attachment, validation and orphan cleanup."""

import os
import time

import pytest

import storage
from conftest import image
from errors import ValidationError
from models import PropertyImage
from services.image_store import MAX_IMAGE_BYTES, ImageStore, validate_uploads


class TestValidateUploads:
    def test_accepts_five_images(self) -> None:
        validate_uploads([image(f"{i}.jpg") for i in range(5)])

    def test_accepts_exactly_max_size(self) -> None:
        validate_uploads([image(size=MAX_IMAGE_BYTES)])

    def test_rejects_six_images(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_uploads([image(f"{i}.jpg") for i in range(6)])
        assert exc_info.value.field == "images"

    def test_rejects_oversized_image(self) -> None:
        with pytest.raises(ValidationError, match="big.jpg"):
            validate_uploads([image("small.jpg"), image("big.jpg", size=MAX_IMAGE_BYTES + 1)])

    @pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", "", None])
    def test_rejects_non_images(self, content_type) -> None:
        with pytest.raises(ValidationError):
            validate_uploads([image("file.bin", content_type=content_type)])


class TestAttachImages:
    def test_rows_follow_upload_order(self, db, make_listing) -> None:
        prop = make_listing()

        rows = ImageStore.attach_images(db, prop.property_id, [image("a.jpg"), image("b.jpg")])
        db.commit()

        assert rows[0].image_id < rows[1].image_id
        listed = ImageStore.list_images(db, prop.property_id)
        assert [r.image_url for r in listed] == [r.image_url for r in rows]

    def test_written_collects_urls(self, db, make_listing, upload_dir) -> None:
        prop = make_listing()
        written = []

        ImageStore.attach_images(db, prop.property_id, [image("a.jpg"), image("b.jpg")], written=written)
        db.commit()

        assert len(written) == 2
        assert sorted(os.listdir(upload_dir)) == sorted(os.path.basename(u) for u in written)

    def test_stored_urls_are_public_paths(self, db, make_listing) -> None:
        prop = make_listing(images=[image("my photo.jpg")])

        url = ImageStore.representative_image(db, prop.property_id)

        assert url.startswith("/uploads/")
        assert url.endswith("-my_photo.jpg")


class TestRepresentativeImage:
    def test_lowest_image_id_wins(self, db, make_listing) -> None:
        prop = make_listing(images=[image("first.jpg")])
        ImageStore.attach_images(db, prop.property_id, [image("later.jpg")])
        db.commit()

        assert ImageStore.representative_image(db, prop.property_id).endswith("first.jpg")

    def test_none_without_images(self, db, make_listing) -> None:
        prop = make_listing()
        assert ImageStore.representative_image(db, prop.property_id) is None

    def test_changes_when_first_image_deleted(self, db, make_listing) -> None:
        prop = make_listing(images=[image("first.jpg"), image("second.jpg")])
        first = ImageStore.list_images(db, prop.property_id)[0]
        db.delete(first)
        db.commit()

        assert ImageStore.representative_image(db, prop.property_id).endswith("second.jpg")


class TestDeleteAllImages:
    def test_removes_rows_and_files(self, db, make_listing, upload_dir) -> None:
        prop = make_listing(images=[image("a.jpg"), image("b.jpg")])

        urls = ImageStore.delete_all_images(db, prop.property_id)
        db.commit()

        assert len(urls) == 2
        assert db.query(PropertyImage).count() == 0
        assert os.listdir(upload_dir) == []

    def test_deferred_file_cleanup(self, db, make_listing, upload_dir) -> None:
        prop = make_listing(images=[image("a.jpg")])

        urls = ImageStore.delete_all_images(db, prop.property_id, cleanup_files=False)
        db.commit()

        assert len(os.listdir(upload_dir)) == 1
        ImageStore.remove_files(urls)
        assert os.listdir(upload_dir) == []

    def test_missing_file_is_not_an_error(self, db, make_listing, upload_dir, caplog) -> None:
        prop = make_listing(images=[image("a.jpg")])
        for name in os.listdir(upload_dir):
            os.remove(os.path.join(upload_dir, name))

        urls = ImageStore.delete_all_images(db, prop.property_id)
        db.commit()

        assert len(urls) == 1
        assert "already missing" in caplog.text


class TestSweepOrphanFiles:
    def _orphan(self, upload_dir: str, age_seconds: float = 0) -> str:
        url = storage.save_upload(b"\xff\xd8orphan", "orphan.jpg", upload_dir)
        if age_seconds:
            path = storage.path_for_url(url, upload_dir)
            past = time.time() - age_seconds
            os.utime(path, (past, past))
        return url

    def test_removes_unreferenced_files(self, db, make_listing, upload_dir) -> None:
        prop = make_listing(images=[image("kept.jpg")])
        orphan = self._orphan(upload_dir)

        removed = ImageStore.sweep_orphan_files(db, min_age_seconds=0)

        assert removed == [orphan]
        remaining = os.listdir(upload_dir)
        assert len(remaining) == 1
        assert ImageStore.representative_image(db, prop.property_id).endswith(remaining[0])

    def test_dry_run_keeps_files(self, db, upload_dir) -> None:
        orphan = self._orphan(upload_dir)

        found = ImageStore.sweep_orphan_files(db, dry_run=True, min_age_seconds=0)

        assert found == [orphan]
        assert os.path.exists(storage.path_for_url(orphan))

    def test_young_files_are_skipped(self, db, upload_dir) -> None:
        young = self._orphan(upload_dir)
        old = self._orphan(upload_dir, age_seconds=3600)

        removed = ImageStore.sweep_orphan_files(db, min_age_seconds=600)

        assert removed == [old]
        assert os.path.exists(storage.path_for_url(young))


class TestImageIds:
    def test_ids_not_reused_after_deleting_the_newest(self, db, make_listing) -> None:
        prop = make_listing(images=[image("a.jpg"), image("b.jpg")])
        newest = ImageStore.list_images(db, prop.property_id)[-1]
        deleted_id = newest.image_id
        db.delete(newest)
        db.commit()

        [added] = ImageStore.attach_images(db, prop.property_id, [image("c.jpg")])
        db.commit()

        assert added.image_id > deleted_id
