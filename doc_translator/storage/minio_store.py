import io

from minio import Minio
from minio.error import S3Error

from doc_translator.logging.logger import Log
from doc_translator.storage.base import BaseDocumentStore
from doc_translator.storage.exceptions import StorageError

_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "NoSuchObject"})


class MinioDocumentStore(BaseDocumentStore):
    """MinIO/S3 object storage for document artifacts."""

    def __init__(self, client: Minio, bucket_name: str) -> None:
        self._client = client
        self._bucket_name = bucket_name
        self._ensure_bucket_exists()

    @classmethod
    def connect(
        cls,
        *,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket_name: str,
        secure: bool = False,
    ) -> "MinioDocumentStore":
        client = Minio(
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
        )
        return cls(client, bucket_name)

    def put(self, key: str, data: bytes) -> None:
        try:
            self._client.put_object(
                bucket_name=self._bucket_name,
                object_name=key,
                data=io.BytesIO(data),
                length=len(data),
            )
        except S3Error as exc:
            raise StorageError(f"Failed to upload {key}: {exc}") from exc

    def get(self, key: str) -> bytes | None:
        try:
            response = self._client.get_object(
                bucket_name=self._bucket_name,
                object_name=key,
            )
        except S3Error as exc:
            if exc.code in _MISSING_OBJECT_CODES:
                return None
            raise StorageError(f"Failed to download {key}: {exc}") from exc
        try:
            return response.read()
        finally:
            response.close()
            response.release_conn()

    def delete(self, key: str) -> None:
        try:
            self._client.remove_object(
                bucket_name=self._bucket_name,
                object_name=key,
            )
        except S3Error as exc:
            if exc.code in _MISSING_OBJECT_CODES:
                return
            raise StorageError(f"Failed to delete {key}: {exc}") from exc

    def _ensure_bucket_exists(self) -> None:
        try:
            if not self._client.bucket_exists(self._bucket_name):
                self._client.make_bucket(self._bucket_name)
                Log.info("Created storage bucket", bucket=self._bucket_name)
        except S3Error as exc:
            raise StorageError(f"Failed to create bucket: {exc}") from exc
