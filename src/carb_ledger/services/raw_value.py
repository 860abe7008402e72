"""
Raw value codec for carb entries.

Maps carb entries to and from the string-keyed value map used for persistence
and transport. Fat and protein inputs are folded into the entry at construction
and are never part of the raw value.
"""

import json
import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from carb_ledger.domain.carb_entry import CarbEntry
from carb_ledger.utils.exceptions import DecodingError

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("grams", "startDate")
MAX_DURATION_SECONDS = timedelta.max.total_seconds()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_timestamp(value: Any) -> bool:
    return isinstance(value, (datetime, str))


def _is_duration_seconds(value: Any) -> bool:
    # NaN and infinity fail the range comparison
    return _is_number(value) and abs(value) < MAX_DURATION_SECONDS


OPTIONAL_KEY_CHECKS = {
    "foodType": _is_string,
    "absorptionTime": _is_duration_seconds,
    "externalID": _is_string,
    "syncIdentifier": _is_string,
}


class RawCarbValue(BaseModel):
    """
    Structured form of a carb entry raw value.

    Field aliases are the raw value keys.
    """

    grams: float
    start_date: datetime = Field(alias="startDate")
    food_type: str | None = Field(None, alias="foodType")
    absorption_time: float | None = Field(None, alias="absorptionTime", description="Seconds")
    external_id: str | None = Field(None, alias="externalID")
    sync_identifier: str | None = Field(None, alias="syncIdentifier")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entry(cls, entry: CarbEntry) -> "RawCarbValue":
        """Build the raw value of an entry."""
        return cls(
            grams=entry.quantity_grams,
            start_date=entry.start_date,
            food_type=entry.food_type,
            absorption_time=(
                entry.absorption_time.total_seconds()
                if entry.absorption_time is not None
                else None
            ),
            external_id=entry.external_id,
            sync_identifier=entry.sync_identifier,
        )

    def to_entry(self) -> CarbEntry:
        """
        Rebuild a carb entry from this raw value.

        An entry with an external ID is considered uploaded.
        """
        return CarbEntry(
            quantity_grams=self.grams,
            start_date=self.start_date,
            food_type=self.food_type,
            absorption_time=(
                timedelta(seconds=self.absorption_time)
                if self.absorption_time is not None
                else None
            ),
            is_uploaded=self.external_id is not None,
            external_id=self.external_id,
            sync_identifier=self.sync_identifier,
        )


class RawValueCodec:
    """
    Encoder and decoder between carb entries and raw value maps.
    """

    def encode(self, entry: CarbEntry) -> dict[str, Any]:
        """
        Encode an entry as a raw value map.

        Args:
            entry: Entry to encode.

        Returns:
            Map with ``grams`` and ``startDate``, plus any optional keys that
            have a value.
        """
        return RawCarbValue.from_entry(entry).model_dump(by_alias=True, exclude_none=True)

    def decode(self, raw: Mapping[str, Any]) -> CarbEntry | None:
        """
        Decode a raw value map into an entry.

        Optional values of the wrong type are ignored.

        Args:
            raw: Raw value map.

        Returns:
            Decoded entry, or None if ``grams`` or ``startDate`` is missing or
            invalid.
        """
        missing = [key for key in REQUIRED_KEYS if raw.get(key) is None]
        if missing:
            logger.debug(f"Raw value missing required keys: {missing}")
            return None

        if not _is_number(raw["grams"]):
            logger.debug(f"Raw value grams is not a number: {raw['grams']!r}")
            return None

        if not _is_timestamp(raw["startDate"]):
            logger.debug(f"Raw value startDate is not a timestamp: {raw['startDate']!r}")
            return None

        values: dict[str, Any] = {key: raw[key] for key in REQUIRED_KEYS}
        for key, check in OPTIONAL_KEY_CHECKS.items():
            value = raw.get(key)
            if value is None:
                continue
            if check(value):
                values[key] = value
            else:
                logger.debug(f"Ignoring raw value {key} of unexpected type: {value!r}")

        try:
            return RawCarbValue.model_validate(values).to_entry()
        except (ValidationError, OverflowError, ValueError) as e:
            logger.debug(f"Failed to decode raw value: {e}")
            return None

    def decode_or_raise(self, raw: Mapping[str, Any]) -> CarbEntry:
        """
        Decode a raw value map, raising when it cannot be decoded.

        Raises:
            DecodingError: If ``grams`` or ``startDate`` is missing or invalid.
        """
        entry = self.decode(raw)
        if entry is None:
            raise DecodingError("Raw value requires numeric 'grams' and a 'startDate' timestamp")
        return entry

    def to_json(self, entry: CarbEntry) -> str:
        """
        Encode an entry as JSON text.

        Timestamps are written in ISO-8601 format.
        """
        return RawCarbValue.from_entry(entry).model_dump_json(by_alias=True, exclude_none=True)

    def from_json(self, text: str) -> CarbEntry:
        """
        Decode an entry from JSON text.

        Args:
            text: JSON object holding a raw value.

        Returns:
            Decoded entry.

        Raises:
            DecodingError: If the text is not a JSON object or cannot be decoded.
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodingError(f"Invalid JSON raw value: {e}") from e

        if not isinstance(raw, dict):
            raise DecodingError("Raw value JSON must be an object")

        return self.decode_or_raise(raw)
