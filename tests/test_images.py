"""
Tests for the static image route.
"""


def test_serves_svg_with_content_type_and_cache_header(client):
    response = client.get("/images/lessons/mathematics.svg")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.headers["cache-control"] == "public, max-age=86400"
    assert b"<svg" in response.content


def test_serves_jpeg(client):
    response = client.get("/images/lessons/test.jpg")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"


def test_missing_image_returns_json_with_suggestions(client):
    response = client.get("/images/lessons/nonexistent.jpg")

    assert response.status_code == 404
    body = response.json()
    assert body["requestedPath"] == "/lessons/nonexistent.jpg"
    assert body["message"] == "Image not found"
    assert body["suggestions"] == ["/images/lessons/mathematics.svg", "/images/lessons/test.jpg"]


def test_path_outside_image_root_is_not_served(client, images_dir):
    (images_dir.parent / "secret.txt").write_text("top-secret-content", encoding="utf-8")

    response = client.get("/images/lessons/..%2F..%2Fsecret.txt")

    assert response.status_code == 404
    assert "top-secret-content" not in response.text
    assert response.json()["message"] == "Image not found"


def test_unrepresentable_file_name_is_not_found(client):
    response = client.get("/images/lessons/a%00b.jpg")

    assert response.status_code == 404
    body = response.json()
    assert body["message"] == "Image not found"
    assert body["requestedPath"] == "/lessons/a\x00b.jpg"
