import logging
import os
from urllib.parse import quote

from botocore.exceptions import BotoCoreError, ClientError
import boto3
from django.conf import settings

from obozy.libs.errors import StorageError

logger = logging.getLogger(__name__)

REGISTRATION_CARDS_BUCKET = "registration_cards"
IMAGES_BUCKET = "images"


class LocalFilesystem:
    def __init__(self, bucket, root=None, base_url=None):
        self.bucket = bucket
        self.root = os.path.join(root or settings.MEDIA_ROOT, bucket)
        self.base_url = (base_url or settings.MEDIA_URL).rstrip("/")

    def _path(self, path):
        full_path = os.path.normpath(os.path.join(self.root, path))
        if not full_path.startswith(os.path.normpath(self.root) + os.sep):
            raise StorageError(f"Invalid storage path '{path}'")
        return full_path

    def upload(self, path, content):
        full_path = self._path(path)
        try:
            os.makedirs(os.path.dirname(full_path), exist_ok=True)
            with open(full_path, "wb+") as destination:
                destination.write(content)
        except OSError as e:
            raise StorageError(f"Upload of '{path}' failed: {e}") from e
        return path

    def public_url(self, path):
        return f"{self.base_url}/{self.bucket}/{quote(path)}"

    def remove(self, paths):
        for path in paths:
            full_path = self._path(path)
            try:
                os.remove(full_path)
            except FileNotFoundError:
                logger.warning("Tried to remove missing file %s", full_path)
            except OSError as e:
                raise StorageError(f"Removal of '{path}' failed: {e}") from e

    def __contains__(self, path):
        return os.path.exists(self._path(path))


class ObjectStorage:
    def __init__(self, bucket, prefix=None, endpoint=None, public_url=None):
        self.bucket = (prefix or settings.STORAGE["prefix"]) + bucket
        endpoint = endpoint or settings.STORAGE["s3_endpoint"]
        self.public_base = public_url or settings.STORAGE["public_url"]

        if endpoint is None:
            self.s3_client = boto3.client("s3")
        else:
            self.s3_client = boto3.client("s3", endpoint_url=endpoint)
        if not self.public_base:
            self.public_base = (endpoint or "https://s3.amazonaws.com").rstrip("/")

    def upload(self, path, content):
        try:
            self.s3_client.put_object(Bucket=self.bucket, Key=path, Body=content)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Upload of '{path}' failed: {e}") from e
        return path

    def public_url(self, path):
        return f"{self.public_base.rstrip('/')}/{self.bucket}/{quote(path)}"

    def remove(self, paths):
        paths = list(paths)
        if not paths:
            return
        try:
            self.s3_client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": path} for path in paths]})
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Removal of {paths} failed: {e}") from e

    def __contains__(self, path):
        try:
            self.s3_client.head_object(Bucket=self.bucket, Key=path)
        except ClientError as e:
            if e.response["Error"]["Code"] == "404":
                return False
            raise StorageError(f"Lookup of '{path}' failed: {e}") from e
        return True


def get_storage(bucket):
    if settings.STORAGE["use_s3"]:
        return ObjectStorage(bucket)
    return LocalFilesystem(bucket)
