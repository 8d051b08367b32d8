from botocore.stub import Stubber

from helpers.s3_helper import S3Service, determine_file_type, generate_unique_key, validate_file


def test_validate_file():
    assert validate_file("a.png", "image/png", 1024) is None
    assert validate_file("clip.mp4", "video/mp4", 1024) is None
    assert "not allowed" in validate_file("doc.pdf", "application/pdf", 1024)
    assert "maximum size of 5MB" in validate_file("big.jpg", "image/jpeg", 5 * 1024 * 1024 + 1)
    assert "empty" in validate_file("a.png", "image/png", 0)


def test_key_and_type_helpers():
    key = generate_unique_key("Photo.JPG", "activity-evidence/")
    assert key.startswith("activity-evidence/")
    assert key.endswith(".jpg")
    assert determine_file_type("image/webp") == "image"
    assert determine_file_type("video/mp4") == "video"
    assert determine_file_type(None) == "other"


def test_public_url():
    storage = S3Service()
    assert storage.get_public_url("activity-evidence/x.png") == (
        "https://ecometrics-test.s3.us-east-1.amazonaws.com/activity-evidence/x.png"
    )
    assert storage.get_public_url(None) is None


def test_delete_is_best_effort():
    storage = S3Service()
    with Stubber(storage.client) as stubber:
        stubber.add_response("delete_object", {})
        stubber.add_client_error("delete_object", service_error_code="AccessDenied", http_status_code=403)

        assert storage.delete_file("activity-evidence/ok.png") is True
        assert storage.delete_file("activity-evidence/denied.png") is False


def test_upload_evidence():
    storage = S3Service()
    with Stubber(storage.client) as stubber:
        stubber.add_response("put_object", {"ETag": '"abc"'})
        stored = storage.upload_evidence(b"data", "tree.webp", "image/webp")

    assert stored.file_key.startswith("activity-evidence/")
    assert stored.file_type == "image"
    assert stored.format == "webp"
    assert stored.file_size == 4
