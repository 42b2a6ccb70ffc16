"""Tests for the upload gateway and the Cloudinary media host."""
import pytest
from cloudinary.exceptions import Error as CloudinaryError

from app.core.errors import UploadError
from app.services.media import get_media_host
from app.services.media import cloudinary_provider
from app.services.media.cloudinary_provider import CloudinaryMediaHost
from app.services.media.mock_provider import MockMediaHost
from app.services.upload_service import upload_image

IMAGE = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8/5+hHgAHggJ/PchI7wAAAABJRU5ErkJggg=="


@pytest.fixture
def host():
    return CloudinaryMediaHost(
        cloud_name="demo", api_key="key123", api_secret="secret456",
        folder="fixmystreet-reports", timeout=7.0,
    )


def test_upload_without_image_returns_400(client):
    resp = client.post("/api/upload", json={})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No image provided"}


def test_upload_with_wrongly_typed_image_returns_400(client):
    resp = client.post("/api/upload", json={"image": 5})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Invalid request"
    assert "image" in body["details"]


def test_upload_with_non_json_body_returns_400(client):
    resp = client.post("/api/upload", content="not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"


def test_upload_with_mock_host(client):
    resp = client.post("/api/upload", json={"image": IMAGE})
    assert resp.status_code == 200
    data = resp.json()
    assert data["url"] == IMAGE
    assert data["publicId"].startswith("fixmystreet-reports/")


def test_upload_host_failure_returns_500(client):
    class BrokenHost(MockMediaHost):
        def upload(self, image):
            raise RuntimeError("socket closed")

    client.app.dependency_overrides[get_media_host] = lambda: BrokenHost()
    resp = client.post("/api/upload", json={"image": IMAGE})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Upload failed", "details": "socket closed"}


def test_upload_image_requires_payload():
    with pytest.raises(UploadError) as excinfo:
        upload_image(MockMediaHost(), "")
    assert excinfo.value.status_code == 400


def test_cloudinary_upload_call(host, monkeypatch):
    calls = []

    def fake_upload(file, **options):
        calls.append((file, options))
        return {
            "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/fixmystreet-reports/abc.jpg",
            "public_id": "fixmystreet-reports/abc",
        }

    monkeypatch.setattr(cloudinary_provider.cloudinary.uploader, "upload", fake_upload)
    result = host.upload(IMAGE)

    assert result.public_id == "fixmystreet-reports/abc"
    assert result.url.startswith("https://res.cloudinary.com/demo/")

    [(file, options)] = calls
    assert file == IMAGE
    assert options["folder"] == "fixmystreet-reports"
    assert options["timeout"] == 7.0
    assert options["transformation"] == [
        {"width": 800, "height": 600, "crop": "limit"},
        {"quality": "auto"},
        {"fetch_format": "auto"},
    ]


def test_cloudinary_rejection_raises_upload_error(host, monkeypatch):
    def fake_upload(file, **options):
        raise CloudinaryError("Invalid image file")

    monkeypatch.setattr(cloudinary_provider.cloudinary.uploader, "upload", fake_upload)
    with pytest.raises(UploadError) as excinfo:
        host.upload(IMAGE)
    assert excinfo.value.status_code == 500
    assert excinfo.value.details == "Invalid image file"


def test_cloudinary_unreachable_returns_500(client, host, monkeypatch):
    def fake_upload(file, **options):
        raise CloudinaryError("Socket error: name resolution failed")

    monkeypatch.setattr(cloudinary_provider.cloudinary.uploader, "upload", fake_upload)
    client.app.dependency_overrides[get_media_host] = lambda: host
    resp = client.post("/api/upload", json={"image": IMAGE})
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Upload failed"
    assert "name resolution failed" in body["details"]


def test_cloudinary_without_credentials(monkeypatch):
    def fake_upload(file, **options):
        raise AssertionError("must not reach Cloudinary")

    monkeypatch.setattr(cloudinary_provider.cloudinary.uploader, "upload", fake_upload)
    with pytest.raises(UploadError) as excinfo:
        CloudinaryMediaHost(cloud_name=None, api_key=None, api_secret=None).upload(IMAGE)
    assert excinfo.value.status_code == 500


def test_resolver_picks_provider(monkeypatch):
    from app.core.settings import settings

    monkeypatch.setattr(settings, "MEDIA_PROVIDER", "mock")
    assert isinstance(get_media_host(), MockMediaHost)

    monkeypatch.setattr(settings, "MEDIA_PROVIDER", "cloudinary")
    resolved = get_media_host()
    assert isinstance(resolved, CloudinaryMediaHost)
    assert resolved.folder == settings.UPLOAD_FOLDER
