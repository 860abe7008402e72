"""
External record builder for carb entries.

Builds the sample submitted to an external health-data store, with the sync
metadata the store uses to merge repeated submissions of the same entry.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

from carb_ledger.domain.carb_entry import (
    CarbEntry,
    ExternalRecord,
    MetadataKey,
    PreviousStoredEntry,
)

logger = logging.getLogger(__name__)

DEFAULT_SYNC_VERSION = 1


def generate_sync_identifier() -> str:
    """Generate a random sync identifier."""
    return str(uuid.uuid4()).upper()


def entry_end_date(entry: CarbEntry) -> datetime:
    """Default end date resolver."""
    return entry.end_date


class ExternalRecordBuilder:
    """
    Builder for external health-store records.

    The identifier factory and end date resolver are injectable so records can
    be built deterministically.
    """

    def __init__(
        self,
        identifier_factory: Callable[[], str] = generate_sync_identifier,
        end_date_resolver: Callable[[CarbEntry], datetime] = entry_end_date,
        default_sync_version: int = DEFAULT_SYNC_VERSION,
    ) -> None:
        """
        Initialize external record builder.

        Args:
            identifier_factory: Produces a new sync identifier.
            end_date_resolver: Computes the record end date of an entry.
            default_sync_version: Sync version for entries with no prior sync state.
        """
        self.identifier_factory = identifier_factory
        self.end_date_resolver = end_date_resolver
        self.default_sync_version = default_sync_version

    def build_metadata(
        self,
        entry: CarbEntry,
        previous: PreviousStoredEntry | None = None,
        sync_version: int | None = None,
    ) -> dict[str, Any]:
        """
        Build the metadata map for an entry.

        Args:
            entry: Entry to submit.
            previous: Stored counterpart of the entry, if it was submitted before.
            sync_version: Sync version to use when there is no previous entry.
                Defaults to the builder's default sync version.

        Returns:
            Metadata map keyed by ``MetadataKey`` values.
        """
        metadata: dict[str, Any] = {}

        if entry.absorption_time is not None:
            # Stored in seconds despite the key name
            metadata[MetadataKey.ABSORPTION_TIME_MINUTES.value] = (
                entry.absorption_time.total_seconds()
            )

        if entry.food_type is not None:
            metadata[MetadataKey.FOOD_TYPE.value] = entry.food_type

        if previous is not None and previous.sync_identifier:
            metadata[MetadataKey.SYNC_VERSION.value] = previous.sync_version + 1
            metadata[MetadataKey.SYNC_IDENTIFIER.value] = previous.sync_identifier
            logger.debug(
                f"Reusing sync identifier {previous.sync_identifier} "
                f"at version {previous.sync_version + 1}"
            )
        else:
            version = self.default_sync_version if sync_version is None else sync_version
            sync_identifier = entry.sync_identifier or self.identifier_factory()
            metadata[MetadataKey.SYNC_VERSION.value] = version
            metadata[MetadataKey.SYNC_IDENTIFIER.value] = sync_identifier
            logger.debug(f"Using sync identifier {sync_identifier} at version {version}")

        if entry.external_id is not None:
            metadata[MetadataKey.EXTERNAL_UUID.value] = entry.external_id

        return metadata

    def build(
        self,
        entry: CarbEntry,
        previous: PreviousStoredEntry | None = None,
        sync_version: int | None = None,
    ) -> ExternalRecord:
        """
        Build the external record for an entry.

        Args:
            entry: Entry to submit.
            previous: Stored counterpart of the entry, if it was submitted before.
            sync_version: Sync version to use when there is no previous entry.

        Returns:
            External record spanning the entry's start and end dates.
        """
        return ExternalRecord(
            quantity_grams=entry.quantity_grams,
            start_date=entry.start_date,
            end_date=self.end_date_resolver(entry),
            metadata=self.build_metadata(entry, previous, sync_version),
        )
