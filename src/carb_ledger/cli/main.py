"""
Command-line interface for Carb Ledger.

Provides commands for computing fat/protein equivalents, encoding and decoding
raw values, and building external store records.
"""

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import typer

from carb_ledger.domain.carb_entry import CarbEntry, PreviousStoredEntry
from carb_ledger.domain.equivalence import calculate_equivalence
from carb_ledger.services.external_record import ExternalRecordBuilder
from carb_ledger.services.raw_value import RawValueCodec
from carb_ledger.utils.exceptions import CarbLedgerError
from carb_ledger.utils.logging_config import get_logger, setup_logging
from carb_ledger.utils.parameters import ParameterLoader
from carb_ledger.utils.timezone_utils import parse_datetime

app = typer.Typer(help="Carb Ledger - Carbohydrate entries and health-store sync records")

logger = get_logger(__name__)


def init_config(config_path: str = "config/config.yaml") -> ParameterLoader:
    """
    Initialize configuration and logging.

    Args:
        config_path: Path to configuration file.

    Returns:
        Parameter loader instance.
    """
    param_loader = ParameterLoader(config_path)
    setup_logging(param_loader.get_logging_config(), "carb_ledger")
    return param_loader


def _parse_start(value: str, timezone_str: str) -> datetime:
    try:
        return parse_datetime(value, timezone_str)
    except ValueError as e:
        raise CarbLedgerError(f"Invalid start date: {value}") from e


def _echo_json(data: dict[str, Any]) -> None:
    typer.echo(json.dumps(data, indent=2, default=str))


def _fail(action: str, error: CarbLedgerError) -> typer.Exit:
    logger.error(f"{action} failed: {error}")
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(code=1)


@app.command()
def equivalence(
    fat: float = typer.Option(..., help="Fat in grams"),
    protein: float = typer.Option(..., help="Protein in grams"),
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
) -> None:
    """
    Show the carbohydrate equivalent of fat and protein.
    """
    try:
        init_config(config_path)
        logger.info(f"Computing equivalence of {fat} g fat and {protein} g protein")

        result = calculate_equivalence(fat, protein)

        typer.echo(f"Fat calories: {result.calories_fat:.1f} kcal")
        typer.echo(f"Protein calories: {result.calories_protein:.1f} kcal")
        typer.echo(f"Fat-protein units: {result.fat_protein_units:.2f}")
        typer.echo(f"Carb equivalent: {result.carb_equivalent_grams:.1f} g")
        typer.echo(f"Absorption time: {result.absorption_time.total_seconds() / 3600:g} h")

    except CarbLedgerError as e:
        raise _fail("Equivalence", e) from e


@app.command()
def encode(
    start: str = typer.Option(..., help="Start date/time, e.g. '2024-01-15 08:00'"),
    grams: float | None = typer.Option(None, help="Carbohydrates in grams"),
    fat: float | None = typer.Option(None, help="Fat in grams"),
    protein: float | None = typer.Option(None, help="Protein in grams"),
    food_type: str | None = typer.Option(None, help="Food description"),
    absorption_hours: float | None = typer.Option(None, help="Absorption time in hours"),
    external_id: str | None = typer.Option(None, help="Identifier in a remote service"),
    sync_identifier: str | None = typer.Option(None, help="Sync identifier"),
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
) -> None:
    """
    Build a carb entry and print its raw value as JSON.

    When both --fat and --protein are given, the entry records their
    carbohydrate equivalent and absorption time instead of --grams.
    """
    try:
        param_loader = init_config(config_path)
        timezone_str = param_loader.get_processing_config().timezone

        if grams is None and (fat is None or protein is None):
            raise CarbLedgerError("Either --grams or both --fat and --protein are required")

        entry = CarbEntry(
            quantity_grams=grams if grams is not None else 0.0,
            start_date=_parse_start(start, timezone_str),
            food_type=food_type,
            absorption_time=(
                timedelta(hours=absorption_hours) if absorption_hours is not None else None
            ),
            external_id=external_id,
            sync_identifier=sync_identifier,
            fat_grams=fat,
            protein_grams=protein,
        )

        logger.info(f"Encoding entry of {entry.quantity_grams:.1f} g")
        typer.echo(RawValueCodec().to_json(entry))

    except CarbLedgerError as e:
        raise _fail("Encode", e) from e


@app.command()
def decode(
    raw_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON raw value file"),
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
) -> None:
    """
    Decode a JSON raw value file and print the carb entry.
    """
    try:
        init_config(config_path)

        logger.info(f"Decoding raw value from {raw_file}")

        entry = RawValueCodec().from_json(raw_file.read_text(encoding="utf-8"))

        data = entry.model_dump(mode="json")
        data["absorption_time"] = (
            entry.absorption_time.total_seconds() if entry.absorption_time is not None else None
        )
        _echo_json(data)

    except CarbLedgerError as e:
        raise _fail("Decode", e) from e


@app.command()
def record(
    raw_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON raw value file"),
    previous_sync_identifier: str | None = typer.Option(
        None, help="Sync identifier of the stored counterpart"
    ),
    previous_sync_version: int = typer.Option(1, help="Sync version of the stored counterpart"),
    sync_version: int | None = typer.Option(
        None, help="Sync version for entries without a stored counterpart"
    ),
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
) -> None:
    """
    Build the external store record for a JSON raw value file.
    """
    try:
        param_loader = init_config(config_path)
        sync_config = param_loader.get_sync_config()

        logger.info(f"Building external record from {raw_file}")

        entry = RawValueCodec().from_json(raw_file.read_text(encoding="utf-8"))

        previous = None
        if previous_sync_identifier is not None:
            previous = PreviousStoredEntry(
                sync_identifier=previous_sync_identifier,
                sync_version=previous_sync_version,
            )

        builder = ExternalRecordBuilder(default_sync_version=sync_config.default_sync_version)
        external_record = builder.build(entry, previous=previous, sync_version=sync_version)

        logger.info(
            f"Built record with sync version "
            f"{external_record.metadata['syncVersion']}"
        )
        _echo_json(external_record.to_dict())

    except CarbLedgerError as e:
        raise _fail("Record", e) from e


if __name__ == "__main__":
    app()
