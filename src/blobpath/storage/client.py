"""Azure Blob Storage client implementing head, get, put and paginated listing."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from azure.core.exceptions import AzureError, HttpResponseError
from azure.storage.blob import BlobPrefix, BlobServiceClient, ContentSettings

from blobpath.errors import BlobPathError, Operation, classify_error
from blobpath.path.spec import SEPARATOR
from blobpath.storage.models import (
    DEFAULT_CONTENT_TYPE,
    DIRECTORY_CONTENT_TYPE,
    ListingResult,
    ObjectContent,
    ObjectKind,
    ObjectMetadata,
    ObjectRecord,
)

if TYPE_CHECKING:
    from blobpath.config import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_LIST_PAGE_SIZE = 5000


class BlobStoreClient:
    """Object store operations against one Azure Storage account.

    Every SDK failure is re-raised as a BlobPathError whose kind is
    classified from the response status and the attempted operation.
    """

    def __init__(
        self,
        storage_connection_string: str,
        list_page_size: int = DEFAULT_LIST_PAGE_SIZE,
        directory_content_type: str = DIRECTORY_CONTENT_TYPE,
    ) -> None:
        """Initialise the Blob service client.

        Args:
            storage_connection_string: Azure Storage connection string.
            list_page_size: Maximum number of results requested per listing page.
            directory_content_type: Content type to store on directory markers.
        """
        self._blob_service = BlobServiceClient.from_connection_string(storage_connection_string)
        self._list_page_size = list_page_size
        self.directory_content_type = directory_content_type

    def head(self, container: str, key: str) -> bool:
        """Check that an object exists, or the container itself when key is empty.

        Returns:
            True when the object exists.

        Raises:
            BlobPathError: OBJECT_DOES_NOT_EXIST on a 404, otherwise the
                classified kind.
        """
        container_client = self._blob_service.get_container_client(container)
        try:
            if key:
                container_client.get_blob_client(key).get_blob_properties()
            else:
                container_client.get_container_properties()
        except AzureError as exc:
            raise self._classified(exc, Operation.HEAD_OBJECT, container, key) from exc
        return True

    def get_metadata(self, container: str, key: str) -> ObjectMetadata:
        """Fetch the properties of one object without downloading its body."""
        blob_client = self._blob_service.get_container_client(container).get_blob_client(key)
        try:
            properties = blob_client.get_blob_properties()
        except AzureError as exc:
            raise self._classified(exc, Operation.GET_METADATA, container, key) from exc
        return self._to_metadata(key, properties)

    def get(self, container: str, key: str) -> ObjectContent:
        """Download one object's body together with its metadata."""
        blob_client = self._blob_service.get_container_client(container).get_blob_client(key)
        try:
            downloader = blob_client.download_blob()
            body = downloader.readall()
        except AzureError as exc:
            raise self._classified(exc, Operation.GET_OBJECT, container, key) from exc
        logger.info("[get] downloaded object; container:%s;key:%s", container, key)
        return ObjectContent(body=body, metadata=self._to_metadata(key, downloader.properties))

    def put(
        self,
        container: str,
        key: str,
        content_length: int | None = None,
        body: bytes | None = None,
        user_metadata: dict[str, str] | None = None,
        content_type: str | None = None,
    ) -> None:
        """Upload an object, overwriting any existing one.

        Args:
            container: Target container.
            key: Target key. A key ending in "/" with no body is a directory marker.
            content_length: Length of body in bytes, if known.
            body: Object content; empty when None.
            user_metadata: User-defined metadata to store with the object.
            content_type: MIME type stored on the object.
        """
        blob_client = self._blob_service.get_container_client(container).get_blob_client(key)
        data = body if body is not None else b""
        content_settings = ContentSettings(content_type=content_type) if content_type else None
        try:
            blob_client.upload_blob(
                data,
                length=content_length if content_length is not None else len(data),
                metadata=user_metadata,
                content_settings=content_settings,
                overwrite=True,
            )
        except AzureError as exc:
            raise self._classified(exc, Operation.PUT_OBJECT, container, key) from exc
        logger.info(
            "[put] uploaded object; container:%s;key:%s;size:%d", container, key, len(data)
        )

    def list_objects(self, container: str, prefix: str, delimiter: str = SEPARATOR) -> ListingResult:
        """List the entries and common prefixes directly under a prefix.

        Follows the continuation token until the backend reports no further
        pages, accumulating entries and common prefixes in backend order.

        Args:
            container: Container to list.
            prefix: Key prefix to list under; "" lists the container root.
            delimiter: Grouping delimiter for common prefixes.

        Returns:
            ListingResult whose base_prefix is the prefix without its
            trailing delimiter.
        """
        container_client = self._blob_service.get_container_client(container)
        result = ListingResult(base_prefix=prefix.removesuffix(delimiter))

        token: str | None = None
        page_count = 0
        while True:
            try:
                pages = container_client.walk_blobs(
                    name_starts_with=prefix or None,
                    delimiter=delimiter,
                    results_per_page=self._list_page_size,
                ).by_page(continuation_token=token)
                page = next(pages, [])
                for item in page:
                    if isinstance(item, BlobPrefix):
                        result.common_prefixes.append(item.name)
                    else:
                        result.entries.append(
                            ObjectRecord(
                                key=item.name,
                                size=item.size,
                                last_modified=_isoformat(item.last_modified),
                            )
                        )
            except AzureError as exc:
                raise self._classified(exc, Operation.LIST_OBJECTS, container, prefix) from exc

            page_count += 1
            token = pages.continuation_token
            if not token:
                break

        logger.info(
            "[list_objects] listing complete; container:%s;prefix:%s;pages:%d;entries:%d;"
            "common_prefixes:%d",
            container,
            prefix,
            page_count,
            len(result.entries),
            len(result.common_prefixes),
        )
        return result

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _classified(
        exc: AzureError, operation: Operation, container: str, key: str
    ) -> BlobPathError:
        """Classify an SDK failure into a BlobPathError."""
        status = exc.status_code if isinstance(exc, HttpResponseError) else None
        kind = classify_error(status, operation)
        logger.warning(
            "[%s] storage request failed; container:%s;key:%s;status:%s;kind:%s",
            operation.value,
            container,
            key,
            status,
            kind.name,
        )
        return BlobPathError(kind, status_code=status, path=f"{SEPARATOR}{container}{SEPARATOR}{key}")

    @staticmethod
    def _to_metadata(key: str, properties: Any) -> ObjectMetadata:
        """Map SDK blob properties to ObjectMetadata."""
        return ObjectMetadata(
            content_type=properties.content_settings.content_type or DEFAULT_CONTENT_TYPE,
            content_length=properties.size,
            checksum=properties.etag or "",
            last_modified=_isoformat(properties.last_modified) or "",
            user_metadata=dict(properties.metadata) if properties.metadata else None,
            object_kind=ObjectKind.from_name(key.rsplit(SEPARATOR, 1)[-1]),
        )


def _isoformat(value: datetime | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def blob_store_client_from_config(config: AppConfig) -> BlobStoreClient:
    """Construct a BlobStoreClient from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured BlobStoreClient instance.
    """
    return BlobStoreClient(
        storage_connection_string=config.storage_connection_string,
        list_page_size=config.list_page_size,
        directory_content_type=config.directory_content_type,
    )
