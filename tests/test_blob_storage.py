import re

from salon_booking.utils.blob_storage import BlobStorage, build_object_key


def test_build_object_key_is_prefixed_and_sanitized():
    key = build_object_key("inspirations", "minha foto.png")
    assert re.match(r"^inspirations/\d+-minha-foto\.png$", key)


def test_build_object_key_strips_directories():
    key = build_object_key("inspirations", "../../etc/passwd")
    assert key.startswith("inspirations/")
    assert key.endswith("-passwd")
    assert ".." not in key


def test_put_returns_public_url(storage, s3_client):
    url = storage.put("portfolio/abc.png", b"\x89PNG", "image/png")

    assert url == "https://media.example.com/portfolio/abc.png"
    assert s3_client.objects["portfolio/abc.png"]["Bucket"] == "test-bucket"
    assert s3_client.objects["portfolio/abc.png"]["ContentType"] == "image/png"


def test_key_from_url(storage):
    assert storage.key_from_url("https://media.example.com/portfolio/abc.png") == "portfolio/abc.png"
    assert storage.key_from_url("https://media.example.com/portfolio/abc.png?v=2") == "portfolio/abc.png"
    assert storage.key_from_url("https://images.unsplash.com/photo-1") is None
    assert storage.key_from_url("https://media.example.com/") is None


def test_delete_removes_object(storage, s3_client):
    url = storage.put("portfolio/abc.png", b"data", "image/png")

    assert storage.delete(url) is True
    assert "portfolio/abc.png" not in s3_client.objects


def test_delete_external_url_is_a_no_op(storage, s3_client):
    storage.put("portfolio/abc.png", b"data", "image/png")

    assert storage.delete("https://images.unsplash.com/photo-1") is False
    assert "portfolio/abc.png" in s3_client.objects


def test_trailing_slash_in_base_url(s3_client):
    storage = BlobStorage(client=s3_client, bucket="b", public_base_url="https://cdn.example.com/")
    assert storage.public_url("k.png") == "https://cdn.example.com/k.png"
