from pathlib import Path

from casedocs.config.settings import Settings
from casedocs.storage.base import BaseStorage
from casedocs.storage.local_storage import LocalStorage
from casedocs.storage.s3_storage import S3Storage


class StorageFactory:
    """Creates the storage backend selected in settings."""

    BACKENDS: tuple[str, ...] = ("s3", "local")

    @classmethod
    def create(cls, settings: Settings, files_root: Path | None = None) -> BaseStorage:
        backend = settings.storage_backend.lower()
        if backend == "s3":
            return S3Storage.from_credentials(
                bucket=settings.s3_bucket,
                region=settings.aws_region,
                access_key_id=settings.aws_access_key_id,
                secret_access_key=settings.aws_secret_access_key,
            )
        if backend == "local":
            return LocalStorage(files_root=files_root or Path(settings.files_root))
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
