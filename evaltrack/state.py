"""
Global application state
Shared services installed at startup and accessible across all modules
"""
import logging
from typing import Optional

from evaltrack.core.aggregator import SubmissionAggregator
from evaltrack.core.directory import CampusDirectory, IdentityVerifier
from evaltrack.core.registry import SessionRegistry
from evaltrack.core.store import JsonDocumentStore, MemoryDocumentStore
from evaltrack.models import AppConfig


logger = logging.getLogger(__name__)

CONFIG: Optional[AppConfig] = None
STORE: Optional[MemoryDocumentStore] = None
DIRECTORY: Optional[IdentityVerifier] = None
REGISTRY: Optional[SessionRegistry] = None
AGGREGATOR: Optional[SubmissionAggregator] = None


def init_services(
    config: AppConfig,
    store: Optional[MemoryDocumentStore] = None,
    directory: Optional[IdentityVerifier] = None,
) -> None:
    """
    Load the document and build the services around it

    Args:
        config: Application configuration
        store: Store to use instead of the JSON file at config.data_path
        directory: Credential check to use instead of the campus allow-list
    """
    global CONFIG, STORE, DIRECTORY, REGISTRY, AGGREGATOR

    if store is None:
        store = JsonDocumentStore(config.data_path)
    store.load()

    CONFIG = config
    STORE = store
    DIRECTORY = directory or CampusDirectory(config.campuses, config.shared_password)
    REGISTRY = SessionRegistry(store)
    AGGREGATOR = SubmissionAggregator(store)
    logger.info(f"✅ Services ready with {len(store.document.sessions)} sessions")


def reset_services() -> None:
    global CONFIG, STORE, DIRECTORY, REGISTRY, AGGREGATOR
    CONFIG = STORE = DIRECTORY = REGISTRY = AGGREGATOR = None
