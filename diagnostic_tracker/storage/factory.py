"""
Backing store selection from configuration.

DASHBOARD_STORE_URL picks the implementation:
    memory://                  in-process dict
    file:///path/to/dir        one JSON file per key
    postgresql://user@host/db  PostgreSQL key/value table

When it is unset, a DATABASE_URL selects PostgreSQL; with neither set the
file store under ./dashboard_data is used.
"""

import logging
import os
from typing import Optional
from urllib.parse import urlparse

from diagnostic_tracker.utils.constants import (
    DEFAULT_STORE_URL,
    ENV_DATABASE_URL,
    ENV_STORE_URL,
    STORE_SCHEME_FILE,
    STORE_SCHEME_MEMORY,
    STORE_SCHEMES_POSTGRES,
)

from .backing_store import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

logger = logging.getLogger(__name__)


def create_backing_store(url: Optional[str] = None) -> KeyValueStore:
    """
    Build a backing store from a URL.

    Args:
        url: Store URL. Defaults to the DASHBOARD_STORE_URL env var, then
             the DATABASE_URL env var (PostgreSQL), then DEFAULT_STORE_URL.

    Returns:
        Configured KeyValueStore

    Raises:
        ValueError: If the URL scheme is not supported
    """
    url = url or os.getenv(ENV_STORE_URL) or os.getenv(ENV_DATABASE_URL) or DEFAULT_STORE_URL
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()

    if scheme == STORE_SCHEME_MEMORY:
        logger.info("Using in-memory dashboard store")
        return MemoryKeyValueStore()

    if scheme == STORE_SCHEME_FILE:
        # file://./relative keeps "." in netloc
        directory = f"{parsed.netloc}{parsed.path}" or "."
        logger.info("Using file dashboard store at %s", directory)
        return FileKeyValueStore(directory)

    if scheme in STORE_SCHEMES_POSTGRES:
        from .postgres_store import PostgresKeyValueStore

        logger.info("Using PostgreSQL dashboard store at %s", parsed.hostname)
        store = PostgresKeyValueStore(url)
        store.init_schema()
        return store

    raise ValueError(f"Unsupported store URL scheme '{scheme}' in {url!r}")
