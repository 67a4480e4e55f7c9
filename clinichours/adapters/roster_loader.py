"""
Clinic roster sources.

A roster document is either a list of ``{name, openingHours}`` records or a
mapping holding such a list under ``clinics``. JSON and YAML are supported.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

import yaml
from pydantic import ValidationError

from ..config import ClinicEntry
from ..domain.exceptions import RosterLoadError
from ..domain.models import Clinic

logger = logging.getLogger(__name__)

EXAMPLE_ROSTER_FILE = Path(__file__).parent / "example_clinic_opening_hours.json"


def _read_document(path: Path) -> Any:
    """Read a JSON or YAML document, chosen by file extension."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except OSError as exc:
        raise RosterLoadError(f"Could not read roster file {path}: {exc}") from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise RosterLoadError(f"Invalid roster file {path}: {exc}") from exc


def _records_to_clinics(records: Any, source: Path) -> List[Clinic]:
    """Convert raw roster records to domain clinics."""
    if isinstance(records, dict):
        records = records.get("clinics")

    if records is None:
        logger.warning("Roster file %s contains no clinics", source)
        return []

    if not isinstance(records, list):
        raise RosterLoadError(
            f"Roster file {source} must contain a list of clinics "
            f"or a mapping with a 'clinics' list."
        )

    try:
        entries = [ClinicEntry.model_validate(record) for record in records]
    except ValidationError as exc:
        raise RosterLoadError(f"Invalid clinic record in {source}: {exc}") from exc

    return [entry.to_clinic() for entry in entries]


class RosterFileLoader:
    """Loads a clinic roster from a JSON or YAML file."""

    def __init__(self, path: Path):
        self.path = path

    def load_roster(self) -> List[Clinic]:
        """
        Load all clinics from the roster file.

        Raises:
            RosterLoadError: If the file is missing, unreadable or malformed
        """
        if not self.path.exists():
            raise RosterLoadError(f"Roster file not found: {self.path}")

        clinics = _records_to_clinics(_read_document(self.path), self.path)
        logger.debug("Loaded %d clinic(s) from %s", len(clinics), self.path)
        return clinics


class ExampleRosterSource(RosterFileLoader):
    """
    Roster source backed by the example clinics bundled with the package.

    Useful for trying the CLI without writing a roster file.
    """

    def __init__(self):
        super().__init__(EXAMPLE_ROSTER_FILE)


class StaticRosterSource:
    """Roster source wrapping clinics that are already in memory."""

    def __init__(self, clinics: Iterable[Clinic]):
        self._clinics = list(clinics)

    def load_roster(self) -> List[Clinic]:
        return list(self._clinics)
