"""Azure blob storage access for the HFP container."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime
from typing import Protocol

from azure.core.exceptions import AzureError
from azure.storage.blob import BlobServiceClient

from hfp_monitor.errors import CollaboratorFailure

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """What the monitors need from storage. Tests pass in-memory fakes."""

    def find_blob_names(self, tag_filter: str) -> Iterator[str]: ...

    def get_last_modified(self, blob_name: str) -> datetime | None: ...


def oday_filter(container: str, op: str, oday: str) -> str:
    """Tag query on the operating day tag, e.g. min_oday = '2024-05-01'."""
    return f"@container='{container}' AND min_oday {op} '{oday}'"


class AzureBlobStore:
    """BlobStore backed by azure-storage-blob, scoped to one container."""

    def __init__(self, connection_string: str, container_name: str) -> None:
        self.container_name = container_name
        try:
            self._service = BlobServiceClient.from_connection_string(connection_string)
        except (AzureError, ValueError) as e:
            raise CollaboratorFailure(f"Could not create blob service client: {e}") from e
        self._container = self._service.get_container_client(container_name)

    def find_blob_names(self, tag_filter: str) -> Iterator[str]:
        """Lazily yield names of blobs whose tags match tag_filter.

        Pages are fetched as the iterator is consumed.
        """
        logger.info("Querying blobs by tags: %s", tag_filter)
        try:
            for blob in self._service.find_blobs_by_tags(tag_filter):
                yield blob.name
        except AzureError as e:
            raise CollaboratorFailure(f"Blob tag query failed: {e}") from e

    def get_last_modified(self, blob_name: str) -> datetime | None:
        try:
            props = self._container.get_blob_client(blob_name).get_blob_properties()
        except AzureError as e:
            raise CollaboratorFailure(f"Failed to get blob properties for {blob_name}: {e}") from e
        return props.last_modified
