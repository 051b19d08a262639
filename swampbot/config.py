"""Bot configuration loaded from config.yml.

Purpose: Collect every tunable in one object owned by the bot and passed to each component
Key Decisions: Defaults come from constants.py; YAML only overrides what it names
Limitations: Read once at start-up - changing the file mid-game has no effect
"""

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import yaml

from swampbot import constants

logger = logging.getLogger(__name__)

CONFIG_FILE: str = "config.yml"


class ConfigError(ValueError):
    """Raised when config.yml holds a value the bot cannot run with."""


class TargetPolicy(str, Enum):
    STICKY = "sticky"
    """Keep the focus target while it lives and stays inside the leader's detection radius"""

    CONTINUOUS = "continuous"
    """Re-pick the focus target every tick"""


@dataclass(frozen=True)
class Composition:
    """Fixed fighter/medic quota a squad needs before it can form."""

    fighters: int
    medics: int = 0

    @property
    def size(self) -> int:
        return self.fighters + self.medics


@dataclass
class BotConfig:
    path_refresh_interval: int = constants.PATH_REFRESH_INTERVAL
    path_drift_tolerance: int = constants.PATH_DRIFT_TOLERANCE

    first_wave: Composition = field(
        default_factory=lambda: Composition(constants.FIRST_WAVE_FIGHTERS, constants.FIRST_WAVE_MEDICS)
    )
    wave: Composition = field(
        default_factory=lambda: Composition(constants.WAVE_FIGHTERS, constants.WAVE_MEDICS)
    )
    flank_wave: Composition = field(
        default_factory=lambda: Composition(constants.FLANK_WAVE_FIGHTERS, constants.FLANK_WAVE_MEDICS)
    )
    flank_enabled: bool = True
    wait_for_idle_production: bool = True
    squad_names: tuple[str, ...] = constants.SQUAD_NAMES

    target_policy: TargetPolicy = TargetPolicy.STICKY
    detection_radius: int = constants.DETECTION_RADIUS
    cohesion_radius: int = constants.COHESION_RADIUS
    flee_radius: int = constants.FLEE_RADIUS
    base_defense_radius: int = constants.BASE_DEFENSE_RADIUS
    hold_range: int = constants.HOLD_RANGE
    flank_reached_radius: int = constants.FLANK_REACHED_RADIUS

    map_width: int = constants.MAP_WIDTH
    map_height: int = constants.MAP_HEIGHT

    report_interval: int = constants.REPORT_INTERVAL
    debug: bool = False

    def validate(self) -> None:
        """
        Check values that would stall or break the tick loop.

        Raises:
            ConfigError: if any value is out of range
        """
        for name in ("path_refresh_interval", "detection_radius", "map_width", "map_height", "report_interval"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")
        for name in (
            "path_drift_tolerance",
            "cohesion_radius",
            "flee_radius",
            "base_defense_radius",
            "hold_range",
            "flank_reached_radius",
        ):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative, got {getattr(self, name)}")
        for name in ("first_wave", "wave", "flank_wave"):
            comp: Composition = getattr(self, name)
            if comp.fighters < 1 or comp.medics < 0:
                raise ConfigError(f"{name} needs at least one fighter and no negative medics, got {comp}")
        if not self.squad_names:
            raise ConfigError("squad_names must not be empty")


_COMPOSITION_KEYS = {"first_wave", "wave", "flank_wave"}
_INT_KEYS = {
    "path_refresh_interval",
    "path_drift_tolerance",
    "detection_radius",
    "cohesion_radius",
    "flee_radius",
    "base_defense_radius",
    "hold_range",
    "flank_reached_radius",
    "map_width",
    "map_height",
    "report_interval",
}
_BOOL_KEYS = {"flank_enabled", "wait_for_idle_production", "debug"}


def _coerce(name: str, value):
    """Turn a raw YAML value into the type BotConfig expects for `name`."""
    if name in _INT_KEYS:
        if isinstance(value, bool):
            raise ConfigError(f"{name} must be an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{name} must be an integer, got {value!r}") from e
    if name in _BOOL_KEYS:
        if not isinstance(value, bool):
            raise ConfigError(f"{name} must be true or false, got {value!r}")
        return value
    if name in _COMPOSITION_KEYS:
        if not isinstance(value, dict):
            raise ConfigError(f"{name} must be a mapping with 'fighters' and 'medics'")
        try:
            return Composition(fighters=int(value.get("fighters", 0)), medics=int(value.get("medics", 0)))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{name}: {e}") from e
    if name == "target_policy":
        try:
            return TargetPolicy(str(value).lower())
        except ValueError as e:
            raise ConfigError(f"unknown target_policy {value!r}, expected 'sticky' or 'continuous'") from e
    if name == "squad_names":
        if not isinstance(value, list):
            raise ConfigError(f"squad_names must be a list of names, got {value!r}")
        return tuple(str(n) for n in value)
    return value


def load_config(path: Optional[Union[str, Path]] = None) -> BotConfig:
    """
    Build a BotConfig from a YAML file.

    A missing file gives the defaults. Unknown keys are logged and ignored.

    Args:
        path: YAML file to read, defaults to config.yml in the working directory

    Returns:
        Validated BotConfig

    Raises:
        ConfigError: if the document is not a mapping or holds invalid values
    """
    config_path = Path(path) if path is not None else Path(CONFIG_FILE)
    config = BotConfig()
    if not config_path.is_file():
        logger.info(f"No config at {config_path}, using defaults")
        return config

    with open(config_path) as config_file:
        raw = yaml.safe_load(config_file) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path} must contain a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(BotConfig)}
    for key, value in raw.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key {key!r} in {config_path}")
            continue
        setattr(config, key, _coerce(key, value))

    config.validate()
    return config
