"""Bulk task operations for taskhub."""

from taskhub.engine.bulk import (
    BulkDeleteResult,
    BulkUpdateResult,
    OwnershipPartition,
    bulk_delete,
    bulk_store,
    bulk_update,
    partition_owned,
)

__all__ = [
    "BulkDeleteResult",
    "BulkUpdateResult",
    "OwnershipPartition",
    "bulk_delete",
    "bulk_store",
    "bulk_update",
    "partition_owned",
]
