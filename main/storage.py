"""
Object storage handle used for customer uploads.

The handle wraps one configured Django storage backend (``STORAGES``) and
exposes the single operation the domain needs: upload bytes, get a public URL.
"""
import logging

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import storages

from main.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class ObjectStorage:

    def __init__(self, alias=None):
        self.alias = alias or settings.OBJECT_STORAGE_ALIAS
        self._backend = None

    def open(self):
        if self._backend is None:
            self._backend = storages[self.alias]
        return self

    def close(self):
        self._backend = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def is_open(self):
        return self._backend is not None

    def upload(self, bucket, key, content, content_type=None):
        """
        Store ``content`` under ``bucket/key`` and return its public URL.

        Raises UpstreamServiceError when the backend rejects the write.
        """
        if not self.is_open:
            raise RuntimeError('ObjectStorage.upload() called before open()')

        name = f'{bucket}/{key}'
        payload = ContentFile(content, name=key)
        payload.content_type = content_type

        try:
            saved_name = self._backend.save(name, payload)
            url = self._backend.url(saved_name)
        except Exception as e:
            logger.error(f"Object storage upload failed for {name}: {e}")
            raise UpstreamServiceError('Error uploading file to object storage') from e

        logger.info(f"Uploaded {saved_name} to object storage")
        return url
