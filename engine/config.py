"""
Generator configuration loader.

Loads and validates the tunable generation numbers from a JSON config file.
Fixed vocabulary (alignment codes, genders, lifestyles) lives in settings.py.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import asdict, dataclass, field

from .error_handler import ConfigError, logger


# Config file location
CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
GENERATOR_CONFIG_FILE = CONFIG_DIR / "generator_settings.json"


@dataclass
class AlignmentConfig:
    """Alignment averaging and personal disposition."""
    # Averaged axis values at or beyond +/- this become lawful/chaotic, good/evil
    quantize_threshold: float = 0.33
    # Dispositions beyond this many standard deviations leave neutral
    disposition_threshold: float = 1.0


@dataclass
class PietyConfig:
    """Religious devotion."""
    # Piety above this (in standard deviations) counts as pious
    threshold: float = 1.5


@dataclass
class LifestyleConfig:
    """Economic class distribution."""
    table: Dict[str, float] = field(default_factory=lambda: {
        "Poor": 60,
        "Middle": 30,
        "Rich": 10,
    })
    # Anchored tables never move more than one class away from the anchor
    anchored: Dict[str, Dict[str, float]] = field(default_factory=lambda: {
        "Poor": {"Poor": 80, "Middle": 20},
        "Middle": {"Poor": 20, "Middle": 60, "Rich": 20},
        "Rich": {"Middle": 20, "Rich": 80},
    })
    noble_chance: float = 0.1


@dataclass
class GenderConfig:
    """Gender distributions, in percent."""
    standard: Dict[str, float] = field(default_factory=lambda: {
        "Female": 49,
        "Male": 49,
        "Non-binary": 0.6,
        "Genderfluid": 0.3,
        "Agender": 0.1,
    })
    # Cultures that eschew typical gender norms
    eschews: Dict[str, float] = field(default_factory=lambda: {
        "Female": 30,
        "Male": 30,
        "Non-binary": 15,
        "Genderfluid": 5,
        "Agender": 20,
    })


@dataclass
class AffiliationConfig:
    """Dragonmark and house odds."""
    # Race can carry the house's mark
    mark_chance: float = 1 / 250
    # Race belongs to the house but can't carry its mark
    house_chance: float = 1 / 1000
    # Any race, no house
    aberrant_chance: float = 1 / 5000
    aberrant_mark: str = "Aberrant"
    # Forced house member of a mark-bearing race
    member_mark_chance: float = 0.5
    # Mark-bearing heir uses the house surname
    house_surname_chance: float = 0.5


@dataclass
class GeneratorConfig:
    """Complete generator configuration."""
    alignment: AlignmentConfig = field(default_factory=AlignmentConfig)
    piety: PietyConfig = field(default_factory=PietyConfig)
    lifestyle: LifestyleConfig = field(default_factory=LifestyleConfig)
    gender: GenderConfig = field(default_factory=GenderConfig)
    affiliation: AffiliationConfig = field(default_factory=AffiliationConfig)
    max_count: int = 100

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorConfig":
        """
        Build a config from a parsed JSON object, keeping defaults for
        anything missing.

        Raises:
            ConfigError: unknown keys or values of the wrong shape
        """
        config = cls()
        sections = {
            "alignment": AlignmentConfig,
            "piety": PietyConfig,
            "lifestyle": LifestyleConfig,
            "gender": GenderConfig,
            "affiliation": AffiliationConfig,
        }
        try:
            for name, section_cls in sections.items():
                if name in data:
                    current = asdict(getattr(config, name))
                    current.update(data[name])
                    setattr(config, name, section_cls(**current))
            if "max_count" in data:
                config.max_count = int(data["max_count"])
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigError(f"Invalid generator config: {e}") from e
        return config

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "GeneratorConfig":
        """
        Load configuration from file, using defaults if file doesn't exist.

        Args:
            config_file: Optional path to config file (defaults to standard location)

        Returns:
            GeneratorConfig instance
        """
        if config_file is None:
            config_file = GENERATOR_CONFIG_FILE

        if not config_file.exists():
            logger.debug(f"Generator config file not found at {config_file}, using defaults.")
            return cls()

        try:
            with config_file.open("r", encoding="utf-8") as f:
                data = json.load(f)
            return cls.from_dict(data)
        except (OSError, json.JSONDecodeError, ConfigError) as e:
            logger.warning(f"Error loading generator config: {e}. Using default configuration.")
            return cls()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, config_file: Optional[Path] = None) -> Path:
        """
        Save configuration to file.

        Args:
            config_file: Optional path to config file (defaults to standard location)

        Returns:
            The path written

        Raises:
            ConfigError: the file couldn't be written
        """
        if config_file is None:
            config_file = GENERATOR_CONFIG_FILE

        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with config_file.open("w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Could not save generator config to {config_file}: {e}") from e
        return config_file


def load_generator_config(config_file: Optional[Path] = None) -> GeneratorConfig:
    """
    Convenience function to load generator config.

    Args:
        config_file: Optional path to config file

    Returns:
        GeneratorConfig instance
    """
    return GeneratorConfig.load(config_file)
