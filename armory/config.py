"""Weapon / projectile configuration.

Configs are frozen dataclasses validated in ``__post_init__``: a weapon with
``burst_size=0`` or a negative cooldown is a design-time mistake and is
rejected with ``WeaponConfigError`` rather than silently clamped.

Archetypes can be authored in JSON::

    {
        "weapons": {
            "rifle": {"fire_mode": "burst", "burst_size": 3},
            "beam": {"fire_mode": "continuous", "max_continuous_duration": 2.0}
        },
        "projectiles": {
            "rocket": {"physics_mode": "custom", "max_lifetime": 5.0}
        }
    }

Enum fields accept their member name in any case. Omitted fields fall back to
``armory.constants``.
"""

from __future__ import annotations

import json
import math
import os
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Type, TypeVar

from armory import constants as C
from armory.errors import WeaponConfigError
from armory.logger import get_logger

log = get_logger("config")

E = TypeVar("E", bound=Enum)


class FireMode(Enum):
    SINGLE = "single"
    BURST = "burst"
    CONTINUOUS = "continuous"


class ProjectileType(Enum):
    HITSCAN = "hitscan"
    PROJECTILE = "projectile"


class PhysicsMode(Enum):
    ENGINE = "engine"
    CUSTOM = "custom"


def _parse_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().upper()
        if key in enum_cls.__members__:
            return enum_cls[key]
    allowed = ", ".join(m.name.lower() for m in enum_cls)
    raise WeaponConfigError(f"{field_name}: {value!r} is not one of ({allowed})")


def _require_number(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise WeaponConfigError(f"{name} must be a number (got {value!r})")
    if not math.isfinite(value):
        raise WeaponConfigError(f"{name} must be finite (got {value!r})")


def _require_non_negative(name: str, value: float) -> None:
    _require_number(name, value)
    if value < 0:
        raise WeaponConfigError(f"{name} must be >= 0 (got {value!r})")


def _require_positive(name: str, value: float) -> None:
    _require_number(name, value)
    if value <= 0:
        raise WeaponConfigError(f"{name} must be > 0 (got {value!r})")


def _check_keys(cls, data: Mapping[str, Any]) -> None:
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise WeaponConfigError(f"{cls.__name__}: unknown field(s) {', '.join(unknown)}")


@dataclass(frozen=True)
class WeaponConfig:
    fire_mode: FireMode = FireMode.SINGLE
    projectile_type: ProjectileType = ProjectileType.HITSCAN
    max_range: float = C.DEFAULT_MAX_WEAPON_RANGE
    end_of_fire_cooldown: float = C.DEFAULT_END_OF_FIRE_COOLDOWN
    hit_mask: int = C.DEFAULT_HIT_MASK
    # Projectile
    projectile_launch_speed: float = C.DEFAULT_PROJECTILE_LAUNCH_SPEED
    projectile_kind: str = C.DEFAULT_PROJECTILE_KIND
    # Burst
    burst_size: int = C.DEFAULT_BURST_SIZE
    burst_interval: float = C.DEFAULT_BURST_INTERVAL
    error_escalation_per_shot: float = C.DEFAULT_ERROR_ESCALATION_PER_SHOT
    # Continuous
    max_continuous_duration: float = C.DEFAULT_MAX_CONTINUOUS_DURATION
    # Accuracy (degrees)
    max_horizontal_angle_error: float = C.DEFAULT_MAX_HORIZONTAL_ANGLE_ERROR
    max_vertical_angle_error: float = C.DEFAULT_MAX_VERTICAL_ANGLE_ERROR

    def __post_init__(self) -> None:
        # Enum fields may arrive as strings when built by hand.
        object.__setattr__(self, "fire_mode", _parse_enum(FireMode, self.fire_mode, "fire_mode"))
        object.__setattr__(
            self, "projectile_type", _parse_enum(ProjectileType, self.projectile_type, "projectile_type")
        )
        if isinstance(self.burst_size, bool) or not isinstance(self.burst_size, int):
            raise WeaponConfigError(f"burst_size must be an integer (got {self.burst_size!r})")
        if self.burst_size <= 0:
            raise WeaponConfigError(f"burst_size must be >= 1 (got {self.burst_size})")
        _require_positive("max_range", self.max_range)
        _require_non_negative("end_of_fire_cooldown", self.end_of_fire_cooldown)
        _require_non_negative("projectile_launch_speed", self.projectile_launch_speed)
        _require_non_negative("burst_interval", self.burst_interval)
        _require_non_negative("max_continuous_duration", self.max_continuous_duration)
        _require_non_negative("max_horizontal_angle_error", self.max_horizontal_angle_error)
        _require_non_negative("max_vertical_angle_error", self.max_vertical_angle_error)
        _require_number("error_escalation_per_shot", self.error_escalation_per_shot)
        if self.error_escalation_per_shot < 1.0:
            raise WeaponConfigError(
                f"error_escalation_per_shot must be >= 1.0 (got {self.error_escalation_per_shot!r})"
            )
        if self.projectile_type is ProjectileType.PROJECTILE and not self.projectile_kind:
            raise WeaponConfigError("projectile_kind is required for projectile weapons")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeaponConfig":
        _check_keys(cls, data)
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["fire_mode"] = self.fire_mode.value
        out["projectile_type"] = self.projectile_type.value
        return out


@dataclass(frozen=True)
class ProjectileConfig:
    physics_mode: PhysicsMode = PhysicsMode.ENGINE
    max_lifetime: float = C.DEFAULT_PROJECTILE_MAX_LIFETIME

    def __post_init__(self) -> None:
        object.__setattr__(self, "physics_mode", _parse_enum(PhysicsMode, self.physics_mode, "physics_mode"))
        _require_positive("max_lifetime", self.max_lifetime)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectileConfig":
        _check_keys(cls, data)
        return cls(**dict(data))


# --- File loading -----------------------------------------------------------
def _read_document(path: str | os.PathLike) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            doc = json.load(fh)
    except OSError as exc:
        raise WeaponConfigError(f"cannot read config file {os.fspath(path)!r}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise WeaponConfigError(f"malformed config file {os.fspath(path)!r}: {exc}") from exc
    if not isinstance(doc, dict):
        raise WeaponConfigError(f"config file {os.fspath(path)!r} must contain a JSON object")
    return doc


def _parse_section(doc: Mapping[str, Any], section: str, factory) -> Dict[str, Any]:
    raw = doc.get(section, {})
    if not isinstance(raw, dict):
        raise WeaponConfigError(f"'{section}' must be an object mapping names to configs")
    parsed = {}
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            raise WeaponConfigError(f"{section}.{name}: expected an object")
        try:
            parsed[name] = factory(entry)
        except WeaponConfigError as exc:
            raise WeaponConfigError(f"{section}.{name}: {exc}") from exc
    return parsed


def load_weapon_configs(path: str | os.PathLike) -> Dict[str, WeaponConfig]:
    configs = _parse_section(_read_document(path), "weapons", WeaponConfig.from_dict)
    log.info(f"loaded {len(configs)} weapon config(s) from {os.fspath(path)}")
    return configs


def load_projectile_configs(path: str | os.PathLike) -> Dict[str, ProjectileConfig]:
    configs = _parse_section(_read_document(path), "projectiles", ProjectileConfig.from_dict)
    log.info(f"loaded {len(configs)} projectile config(s) from {os.fspath(path)}")
    return configs


__all__ = [
    "FireMode",
    "ProjectileType",
    "PhysicsMode",
    "WeaponConfig",
    "ProjectileConfig",
    "load_weapon_configs",
    "load_projectile_configs",
]
