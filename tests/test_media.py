import logging
from io import BytesIO

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from medialibrary.models import MediaItem
from medialibrary.services import MediaValidationError, clean_tags, create_media_item, reorder_media
from projects.models import ContentType, Project


def _png(name="oak.png", size=(800, 600)) -> SimpleUploadedFile:
    buf = BytesIO()
    Image.new("RGB", size, (120, 80, 40)).save(buf, format="PNG")
    return SimpleUploadedFile(name, buf.getvalue(), content_type="image/png")


@pytest.fixture
def project(db):
    ct = ContentType.objects.create(name="furniture", display_name="Furniture")
    return Project.objects.create(content_type=ct)


# =============================================================================
# Services
# =============================================================================


@pytest.mark.django_db
class TestCreateMedia:
    def test_stores_image_and_thumbnail(self):
        item = create_media_item(_png(), alt=" Oak table ", tags="Oak, oak, Table")

        assert item.filename == "oak.png"
        assert item.alt == "Oak table"
        assert item.mime_type == "image/png"
        assert (item.width, item.height) == (800, 600)
        assert item.tags == ["oak", "table"]
        assert item.thumbnail.name.endswith(".webp")
        with Image.open(item.thumbnail.open("rb")) as thumb:
            assert max(thumb.size) == 400

    def test_rejects_non_images(self):
        upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        with pytest.raises(MediaValidationError, match="Only image files"):
            create_media_item(upload)

    def test_rejects_corrupt_images(self):
        upload = SimpleUploadedFile("fake.png", b"not really a png", content_type="image/png")
        with pytest.raises(MediaValidationError, match="Invalid image"):
            create_media_item(upload)
        assert not MediaItem.objects.exists()

    def test_rejects_large_files(self, settings):
        settings.MEDIA_MAX_UPLOAD_MB = 1
        upload = _png()
        upload.size = 2 * 1024 * 1024
        with pytest.raises(MediaValidationError, match="too large"):
            create_media_item(upload)

    def test_unknown_project(self):
        with pytest.raises(MediaValidationError, match="Project not found"):
            create_media_item(_png(), project_id=424242)

    def test_thumbnail_failure_falls_back_to_original(self, monkeypatch):
        def boom(img):
            raise OSError("encoder missing")

        monkeypatch.setattr("medialibrary.services._thumbnail", boom)
        item = create_media_item(_png())
        assert item.pk is not None
        assert not item.thumbnail
        assert item.thumbnail_url == item.original_url

    def test_thumbnail_failure_is_logged_with_filename(self, monkeypatch, caplog):
        def boom(img):
            raise OSError("encoder missing")

        monkeypatch.setattr("medialibrary.services._thumbnail", boom)
        with caplog.at_level(logging.WARNING, logger="medialibrary.services"):
            create_media_item(_png("chair.png"))

        record = next(r for r in caplog.records if r.getMessage() == "Thumbnail generation failed")
        assert record.media_filename == "chair.png"
        assert record.exc_info is not None


def test_clean_tags():
    assert clean_tags(" Oak ,oak,, Walnut") == ["oak", "walnut"]
    assert clean_tags(["A", "a", None]) == ["a"]
    assert clean_tags(3) == []


@pytest.mark.django_db
def test_reorder_only_touches_project_items(project):
    a = create_media_item(_png("a.png"), project_id=project.id)
    b = create_media_item(_png("b.png"), project_id=project.id)
    loose = create_media_item(_png("c.png"))

    assert reorder_media(project_id=project.id, ids=[b.id, loose.id, a.id]) == 2

    a.refresh_from_db()
    b.refresh_from_db()
    loose.refresh_from_db()
    assert (b.order, a.order, loose.order) == (0, 2, None)


# =============================================================================
# HTTP
# =============================================================================


@pytest.mark.django_db
class TestMediaApi:
    def test_upload(self, staff_client, project):
        res = staff_client.post(
            "/api/admin/media",
            {"file": _png(), "alt": "Oak", "category": "tables", "tags": "oak", "project_id": project.id},
        )
        assert res.status_code == 201
        body = res.json()
        assert body["filename"] == "oak.png"
        assert body["projectId"] == project.id
        assert body["thumbnailUrl"].endswith(".webp")
        assert body["originalUrl"] != body["thumbnailUrl"]

    def test_upload_rejects_text(self, staff_client):
        upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        res = staff_client.post("/api/admin/media", {"file": upload})
        assert res.status_code == 400
        assert res.json() == {"detail": "Only image files are allowed"}

    def test_upload_requires_staff(self, user_client):
        assert user_client.post("/api/admin/media", {"file": _png()}).status_code == 403
        assert not MediaItem.objects.exists()

    def test_list_filters(self, staff_client, project):
        create_media_item(_png("a.png"), tags="oak", category="tables", project_id=project.id)
        create_media_item(_png("b.png"), tags="walnut", category="chairs")

        def ids(query):
            return [m["filename"] for m in staff_client.get(f"/api/admin/media{query}").json()["items"]]

        assert sorted(ids("")) == ["a.png", "b.png"]
        assert ids("?tag=oak") == ["a.png"]
        assert ids("?category=chairs") == ["b.png"]
        assert ids(f"?project_id={project.id}") == ["a.png"]
        assert ids("?unassigned=true") == ["b.png"]
        assert ids("?search=b.p") == ["b.png"]

    def test_partial_update(self, staff_client, project):
        item = create_media_item(_png(), alt="Old", category="tables", tags="oak")
        res = staff_client.patch(
            f"/api/admin/media/{item.id}",
            {"alt": "New", "projectId": project.id},
            content_type="application/json",
        )
        assert res.status_code == 200
        body = res.json()
        assert body["alt"] == "New"
        assert body["projectId"] == project.id
        assert body["category"] == "tables"
        assert body["tags"] == ["oak"]

    def test_unassign_with_null(self, staff_client, project):
        item = create_media_item(_png(), project_id=project.id)
        res = staff_client.patch(f"/api/admin/media/{item.id}", {"projectId": None}, content_type="application/json")
        assert res.json()["projectId"] is None

    def test_reorder(self, staff_client, project):
        a = create_media_item(_png("a.png"), project_id=project.id)
        b = create_media_item(_png("b.png"), project_id=project.id)
        res = staff_client.post(
            "/api/admin/media/reorder",
            {"projectId": project.id, "ids": [b.id, a.id]},
            content_type="application/json",
        )
        assert res.json() == {"updated": 2}
        listed = staff_client.get(f"/api/admin/media?project_id={project.id}").json()["items"]
        assert [m["filename"] for m in listed] == ["b.png", "a.png"]

    def test_delete(self, staff_client):
        item = create_media_item(_png())
        assert staff_client.delete(f"/api/admin/media/{item.id}").status_code == 204
        assert staff_client.get(f"/api/admin/media/{item.id}").status_code == 404

    def test_project_delete_keeps_media(self, staff_client, project):
        item = create_media_item(_png(), project_id=project.id)
        staff_client.delete(f"/api/admin/projects/{project.id}")
        item.refresh_from_db()
        assert item.project_id is None
