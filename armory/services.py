"""Collaborator ports for the firing core.

Weapons and projectiles depend on narrow protocol-style interfaces instead of
an engine object. Engine glue (raycasts, prefab instantiation, rigid bodies,
effects) implements these; tests implement them with small fakes.

Ports:
- RayQueryPort        -> nearest-hit ray query used by hitscan weapons
- ProjectileSpawnPort -> instantiates a projectile at a pose (ProjectileSystem);
                       the returned handle may expose ``projectile_id``
- RigidBodyPort       -> velocity change / position override for projectiles
- ImpactObserver      -> impact & despawn notifications (logging, effects)
- EffectsPort         -> optional continuous-fire start/stop presentation
- MuzzlePort          -> current muzzle position + forward direction

``WeaponServices`` bundles the ports one ``WeaponController`` needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, Optional, Protocol

from pygame.math import Vector3

from armory.logger import get_logger

_impact_log = get_logger("impact")


# ---- Value types ----
@dataclass
class MuzzlePose:
    position: Vector3 = field(default_factory=lambda: Vector3(0, 0, 0))
    forward: Vector3 = field(default_factory=lambda: Vector3(0, 0, 1))


@dataclass(frozen=True)
class RayHit:
    object_id: Hashable
    point: Vector3


@dataclass(frozen=True)
class ImpactEvent:
    object_id: Hashable
    point: Vector3


class DespawnReason(Enum):
    LIFETIME = "lifetime"
    IMPACT = "impact"


# ---- Protocols ----
class MuzzlePort(Protocol):
    position: Vector3
    forward: Vector3


class RayQueryPort(Protocol):
    def ray_query(
        self, origin: Vector3, direction: Vector3, max_distance: float, mask: int
    ) -> Optional[RayHit]: ...


class ProjectileHandle(Protocol):
    def launch(self, direction: Vector3, speed: float) -> None: ...


class ProjectileSpawnPort(Protocol):
    def spawn(self, pose: MuzzlePose, kind: str) -> ProjectileHandle: ...


class RigidBodyPort(Protocol):
    def apply_impulse(self, body: Any, velocity_delta: Vector3) -> None: ...
    def set_position(self, body: Any, position: Vector3) -> None: ...


class ImpactObserver(Protocol):
    def notify_impact(self, object_id: Hashable, point: Vector3) -> None: ...
    def notify_despawn(self, reason: DespawnReason) -> None: ...


class EffectsPort(Protocol):
    def start_continuous_fire(self) -> None: ...
    def stop_continuous_fire(self) -> None: ...


# ---- Default implementations ----
class LoggingObserver:
    """Observer that only writes to the ``impact`` log channel."""

    def __init__(self, logger=None):
        self.log = logger or _impact_log

    def notify_impact(self, object_id, point) -> None:
        self.log.info(f"hit {object_id} at ({point.x:.2f}, {point.y:.2f}, {point.z:.2f})")

    def notify_despawn(self, reason: DespawnReason) -> None:
        self.log.debug(f"projectile despawned ({reason.value})")


def safe_notify_impact(observer: ImpactObserver | None, object_id, point, log=_impact_log) -> bool:
    """Deliver an impact notification; delivery failures are logged, never raised."""
    if observer is None:
        return False
    try:
        observer.notify_impact(object_id, point)
    except Exception as exc:
        log.warn(f"impact observer failed: {exc!r}")
        return False
    return True


def safe_notify_despawn(observer: ImpactObserver | None, reason: DespawnReason, log=_impact_log) -> bool:
    if observer is None:
        return False
    try:
        observer.notify_despawn(reason)
    except Exception as exc:
        log.warn(f"despawn observer failed: {exc!r}")
        return False
    return True


@dataclass
class WeaponServices:
    muzzle: MuzzlePort
    ray_query: RayQueryPort | None = None
    projectiles: ProjectileSpawnPort | None = None
    observer: ImpactObserver | None = field(default_factory=LoggingObserver)
    effects: EffectsPort | None = None


__all__ = [
    "MuzzlePose",
    "RayHit",
    "ImpactEvent",
    "DespawnReason",
    "MuzzlePort",
    "RayQueryPort",
    "ProjectileHandle",
    "ProjectileSpawnPort",
    "RigidBodyPort",
    "ImpactObserver",
    "EffectsPort",
    "LoggingObserver",
    "WeaponServices",
    "safe_notify_impact",
    "safe_notify_despawn",
]
