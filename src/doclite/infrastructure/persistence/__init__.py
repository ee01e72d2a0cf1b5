"""Persistence layer: engine/session management, provisioning and repositories."""

from doclite.infrastructure.persistence.collection_provisioner import CollectionProvisioner
from doclite.infrastructure.persistence.database import (
    DatabaseManager,
    close_database,
    get_db_manager,
    get_db_session,
    init_database,
)

__all__ = [
    "CollectionProvisioner",
    "DatabaseManager",
    "close_database",
    "get_db_manager",
    "get_db_session",
    "init_database",
]
