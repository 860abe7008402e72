"""
Carbohydrate entry domain models.

This module defines the carb entry value object, the stored-entry view used for
sync reconciliation, and the record submitted to an external health-data store.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from carb_ledger.domain.equivalence import calculate_equivalence

CARBOHYDRATE_QUANTITY_TYPE = "dietaryCarbohydrates"
GRAM_UNIT = "g"


class MetadataKey(str, Enum):
    """Metadata keys attached to an external record."""

    ABSORPTION_TIME_MINUTES = "absorptionTimeMinutes"
    FOOD_TYPE = "foodType"
    SYNC_VERSION = "syncVersion"
    SYNC_IDENTIFIER = "syncIdentifier"
    EXTERNAL_UUID = "externalUUID"


class CarbEntry(BaseModel):
    """
    A user-reported carbohydrate intake.

    When both ``fat_grams`` and ``protein_grams`` are passed to the constructor,
    the entry records their carbohydrate equivalent instead of the supplied
    quantity, and their absorption time instead of the supplied one. The fat and
    protein values themselves are not kept on the entry.

    Entries are frozen. Use ``with_absorption_time`` to adjust the absorption
    time of an existing entry.
    """

    quantity_grams: float = Field(description="Recorded carbohydrates in grams")
    start_date: datetime = Field(description="Time the food was eaten")
    food_type: str | None = Field(None, description="Free-form food description")
    absorption_time: timedelta | None = Field(None, description="Expected absorption duration")
    is_uploaded: bool = Field(False, description="Whether the entry exists in a remote service")
    external_id: str | None = Field(None, description="Identifier in a remote service")
    sync_identifier: str | None = Field(None, description="Stable reconciliation identifier")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def apply_fat_protein_equivalence(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        fat_grams = data.pop("fat_grams", None)
        protein_grams = data.pop("protein_grams", None)

        if fat_grams is not None and protein_grams is not None:
            equivalence = calculate_equivalence(float(fat_grams), float(protein_grams))
            data["quantity_grams"] = equivalence.carb_equivalent_grams
            data["absorption_time"] = equivalence.absorption_time

        return data

    @property
    def created_by_current_app(self) -> bool:
        """Entries built by this package always originate from it."""
        return True

    @property
    def end_date(self) -> datetime:
        """Start date shifted by the absorption time, if one is set."""
        if self.absorption_time is None:
            return self.start_date
        return self.start_date + self.absorption_time

    def with_absorption_time(self, absorption_time: timedelta | None) -> "CarbEntry":
        """
        Return a copy of this entry with a different absorption time.

        Args:
            absorption_time: New absorption time, or None to clear it.

        Returns:
            New entry; this one is left unchanged.
        """
        return self.model_copy(update={"absorption_time": absorption_time})


class PreviousStoredEntry(BaseModel):
    """Sync state of an entry already present in the external store."""

    sync_identifier: str | None = None
    sync_version: int = 1


class ExternalRecord(BaseModel):
    """
    Quantity sample ready for submission to an external health-data store.
    """

    quantity_type: str = CARBOHYDRATE_QUANTITY_TYPE
    unit: str = GRAM_UNIT
    quantity_grams: float
    start_date: datetime
    end_date: datetime
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the record to a JSON-ready dictionary.

        Returns:
            Dictionary with ISO-formatted timestamps.
        """
        data = self.model_dump()
        data["start_date"] = self.start_date.isoformat()
        data["end_date"] = self.end_date.isoformat()
        return data
