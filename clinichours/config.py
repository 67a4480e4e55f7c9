"""
Configuration management using Pydantic Settings.
"""

from pathlib import Path
from typing import List, Optional

import pendulum
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain.models import Clinic


class DefaultsConfig(BaseModel):
    """Default settings for queries."""
    query_hour: int = 12

    @field_validator("query_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v


class ClinicEntry(BaseModel):
    """Clinic roster entry as written in config or roster files."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    opening_hours: List[str] = Field(default_factory=list, alias="openingHours")

    def to_clinic(self) -> Clinic:
        """Convert to the domain value."""
        return Clinic(name=self.name, opening_hours=tuple(self.opening_hours))


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Pacific/Auckland"
    roster_file: Optional[Path] = None
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    clinics: List[ClinicEntry] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("clinics")
    @classmethod
    def validate_clinics(cls, value: List[ClinicEntry]) -> List[ClinicEntry]:
        """Ensure clinic names are unique."""
        seen_names: set[str] = set()
        for clinic in value:
            if clinic.name in seen_names:
                raise ValueError(f"Duplicate clinic name detected: {clinic.name}")
            seen_names.add(clinic.name)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``roster_file`` is resolved against the directory of the
        config file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        if config.roster_file is not None and not config.roster_file.is_absolute():
            config.roster_file = config_path.parent / config.roster_file

        return config

    def inline_roster(self) -> List[Clinic]:
        """Clinics defined directly in the config file."""
        return [entry.to_clinic() for entry in self.clinics]


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
