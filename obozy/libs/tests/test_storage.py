import pytest
from botocore.exceptions import ClientError

from obozy.libs import storage
from obozy.libs.errors import StorageError
from obozy.libs.storage import LocalFilesystem, ObjectStorage, get_storage


class DummyS3Client:
    def __init__(self):
        self.objects = {}

    def put_object(self, Bucket, Key, Body):
        self.objects[(Bucket, Key)] = Body

    def delete_objects(self, Bucket, Delete):
        for item in Delete["Objects"]:
            self.objects.pop((Bucket, item["Key"]), None)

    def head_object(self, Bucket, Key):
        if (Bucket, Key) not in self.objects:
            raise ClientError({"Error": {"Code": "404"}}, "HeadObject")
        return {}


@pytest.fixture
def s3_client(monkeypatch):
    client = DummyS3Client()
    monkeypatch.setattr(storage.boto3, "client",
                        lambda *args, **kwargs: client)
    return client


def test_local_upload_and_remove(tmp_path):
    cards = LocalFilesystem("registration_cards", root=str(tmp_path),
                            base_url="/media/")
    path = cards.upload("12/karta.pdf", b"%PDF-1.4")

    assert path == "12/karta.pdf"
    assert path in cards
    assert (tmp_path / "registration_cards" / "12" / "karta.pdf").read_bytes() \
        == b"%PDF-1.4"
    assert cards.public_url(path) == "/media/registration_cards/12/karta.pdf"

    cards.remove([path])
    assert path not in cards


def test_local_paths_cannot_escape_the_bucket(tmp_path):
    cards = LocalFilesystem("registration_cards", root=str(tmp_path))
    with pytest.raises(StorageError):
        cards.upload("../../etc/passwd", b"")


def test_removing_a_missing_local_file_is_not_an_error(tmp_path):
    LocalFilesystem("images", root=str(tmp_path)).remove(["nope.png"])


def test_object_storage_round_trip(s3_client):
    images = ObjectStorage("images", prefix="obozy-",
                           endpoint="https://s3.example.com",
                           public_url="https://cdn.example.com")
    images.upload("homepage/1/las.jpg", b"jpeg")

    assert s3_client.objects[("obozy-images", "homepage/1/las.jpg")] == b"jpeg"
    assert "homepage/1/las.jpg" in images
    assert images.public_url("homepage/1/las.jpg") == \
        "https://cdn.example.com/obozy-images/homepage/1/las.jpg"

    images.remove(["homepage/1/las.jpg"])
    assert "homepage/1/las.jpg" not in images


def test_backend_follows_settings(settings, s3_client):
    settings.STORAGE = dict(settings.STORAGE, use_s3=True, prefix="")
    assert isinstance(get_storage("images"), ObjectStorage)

    settings.STORAGE = dict(settings.STORAGE, use_s3=False)
    assert isinstance(get_storage("images"), LocalFilesystem)
