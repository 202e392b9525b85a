"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.exceptions import ConfigurationError
from .domain.models import (
    DEFAULT_REGIONS,
    WORLD_CITIES,
    BusinessHoursWindow,
    Region,
    WorldCity,
)
from .domain.timezone_converter import is_valid_timezone, resolve_host_timezone

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "tzlink.yaml"


def _check_timezone(value: str) -> str:
    if not is_valid_timezone(value):
        raise ValueError(f"Unknown IANA timezone: '{value}'")
    return value


class BusinessHoursConfig(BaseModel):
    """Working hours applied to every region."""
    start_hour: int = 9
    end_hour: int = 17
    work_days: List[int] = Field(default_factory=lambda: [0, 1, 2, 3, 4])  # Monday-Friday

    @field_validator("start_hour")
    @classmethod
    def validate_start_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("end_hour")
    @classmethod
    def validate_end_hour(cls, v: int) -> int:
        """Validate hour is between 1 and 24."""
        if not 1 <= v <= 24:
            raise ValueError(f"Hour must be between 1 and 24, got {v}")
        return v

    @field_validator("work_days")
    @classmethod
    def validate_work_days(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"work_days must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        return deduped

    @model_validator(mode="after")
    def validate_hours_order(self) -> "BusinessHoursConfig":
        """Ensure the configured window opens before it closes."""
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        return self

    def to_window(self) -> BusinessHoursWindow:
        """Build the domain value object."""
        return BusinessHoursWindow(
            start_hour=self.start_hour,
            end_hour=self.end_hour,
            work_days=frozenset(self.work_days),
        )


class RegionConfig(BaseModel):
    """A named region and its IANA timezone."""
    name: str
    timezone: str

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject names missing from the timezone database."""
        return _check_timezone(value)

    def to_region(self) -> Region:
        return Region(name=self.name, timezone=self.timezone)


class CityConfig(BaseModel):
    """A world clock city."""
    name: str
    timezone: str
    country: str = ""

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject names missing from the timezone database."""
        return _check_timezone(value)

    def to_city(self) -> WorldCity:
        return WorldCity(name=self.name, timezone=self.timezone, country=self.country)


class SearchConfig(BaseModel):
    """Settings for the meeting time search."""
    window_hours: int = 12
    max_results: int = 5

    @field_validator("window_hours")
    @classmethod
    def validate_window_hours(cls, value: int) -> int:
        """Keep the scan window between 1 and 48 hours either side."""
        if not 1 <= value <= 48:
            raise ValueError(f"window_hours must be between 1 and 48, got {value}")
        return value

    @field_validator("max_results")
    @classmethod
    def validate_max_results(cls, value: int) -> int:
        """Ensure at least one suggestion can be returned."""
        if value < 1:
            raise ValueError("max_results must be at least 1")
        return value


def _default_regions() -> List[RegionConfig]:
    return [RegionConfig(name=r.name, timezone=r.timezone) for r in DEFAULT_REGIONS]


def _default_cities() -> List[CityConfig]:
    return [CityConfig(name=c.name, timezone=c.timezone, country=c.country) for c in WORLD_CITIES]


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str | None = None  # None: use the host timezone
    business_hours: BusinessHoursConfig = Field(default_factory=BusinessHoursConfig)
    regions: List[RegionConfig] = Field(default_factory=_default_regions)
    search: SearchConfig = Field(default_factory=SearchConfig)
    world_cities: List[CityConfig] = Field(default_factory=_default_cities)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str | None) -> str | None:
        """Reject names missing from the timezone database."""
        if value is None:
            return value
        return _check_timezone(value)

    @field_validator("regions")
    @classmethod
    def validate_regions(cls, value: List[RegionConfig]) -> List[RegionConfig]:
        """Ensure at least one region and unique region names."""
        if not value:
            raise ValueError("At least one region must be configured")
        seen_names: set[str] = set()
        for region in value:
            name_key = region.name.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate region name detected: {region.name}")
            seen_names.add(name_key)
        return value

    def resolved_timezone(self) -> str:
        """The configured timezone, or the host timezone when unset."""
        return self.timezone or resolve_host_timezone()

    def get_regions(self) -> List[Region]:
        return [region.to_region() for region in self.regions]

    def get_world_cities(self) -> List[WorldCity]:
        return [city.to_city() for city in self.world_cities]

    def find_region(self, name: str) -> Region | None:
        """Find a configured region by name, case-insensitively."""
        for region in self.regions:
            if region.name.lower() == name.lower():
                return region.to_region()
        return None

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the file is not valid YAML or not a mapping
            pydantic.ValidationError: If a setting has an invalid value
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a {CONFIG_FILE_NAME} file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the root level.")

        logger.info("Loaded configuration from %s", config_path)
        return cls(**data)

    @classmethod
    def load_or_default(cls, config_path: Path | None = None) -> "AppConfig":
        """
        Load an explicit config file, else the default one if present.

        An explicitly given path must exist; a missing default file simply
        yields the built-in defaults.
        """
        if config_path is not None:
            return cls.load_from_yaml(config_path)

        default_path = get_default_config_path()
        if default_path.exists():
            return cls.load_from_yaml(default_path)

        logger.debug("No %s found, using built-in defaults", CONFIG_FILE_NAME)
        return cls()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for tzlink.yaml in current directory
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / CONFIG_FILE_NAME

    return config_path
