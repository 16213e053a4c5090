"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    """Centralized configuration for the storage client and path handles.

    The connection string has no default and causes a KeyError at load
    time if the environment variable is missing. The remaining fields have
    defaults that can be overridden via environment variables.
    """

    # Required
    storage_connection_string: str

    # Defaults, overridable via env
    eager_loading: bool = False
    list_page_size: int = 5000
    directory_content_type: str = "application/x-directory"


def load_config() -> AppConfig:
    """Construct an AppConfig from environment variables.

    Required environment variables:
        BLOBPATH_STORAGE_CONNECTION_STRING: Azure Storage account connection string.

    Optional environment variables (with defaults):
        BLOBPATH_EAGER_LOADING: Build and cache the directory tree when a path
            handle is created (default: false).
        BLOBPATH_LIST_PAGE_SIZE: Maximum results per listing page (default: 5000).
        BLOBPATH_DIRECTORY_CONTENT_TYPE: Content type written on directory
            markers (default: application/x-directory).

    Returns:
        Configured AppConfig instance.
    """
    return AppConfig(
        storage_connection_string=os.environ["BLOBPATH_STORAGE_CONNECTION_STRING"],
        eager_loading=os.environ.get("BLOBPATH_EAGER_LOADING", "false").lower() in _TRUE_VALUES,
        list_page_size=int(os.environ.get("BLOBPATH_LIST_PAGE_SIZE", "5000")),
        directory_content_type=os.environ.get(
            "BLOBPATH_DIRECTORY_CONTENT_TYPE", "application/x-directory"
        ),
    )
