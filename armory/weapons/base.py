"""Fire-mode volleys.

A volley is the per-trigger-pull state of one fire mode. The controller holds
exactly one volley while FIRING and none otherwise, and each variant carries
only the timers its mode needs:

    SingleVolley                                   (no timers)
    BurstVolley(shots_remaining, next_shot_in)
    ContinuousVolley(time_remaining)

Volleys drive the controller through three narrow calls: ``fire_shot()``,
``stop()`` and ``error_escalation``. They never touch cooldown state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Hashable, Optional

from pygame.math import Vector3

from armory.config import FireMode, ProjectileType, WeaponConfig
from armory.services import RayHit

if TYPE_CHECKING:  # pragma: no cover
    from .controller import WeaponController


@dataclass(frozen=True)
class Shot:
    """Record of one emitted shot (instrumentation only)."""

    index: int
    projectile_type: ProjectileType
    direction: Vector3
    escalation: float
    h_error: float
    v_error: float
    hit: Optional[RayHit] = None
    spawned: bool = False
    projectile_id: Optional[Hashable] = None

    @property
    def hit_object(self) -> Optional[Hashable]:
        return self.hit.object_id if self.hit else None


class Volley:
    """Base volley. Subclasses override the hooks they need."""

    mode: FireMode

    def start(self, weapon: "WeaponController") -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def tick(self, weapon: "WeaponController", dt: float) -> None:
        pass

    def on_stop(self, weapon: "WeaponController") -> None:
        pass


class SingleVolley(Volley):
    mode = FireMode.SINGLE

    def start(self, weapon):
        weapon.fire_shot()
        weapon.stop()

    def __repr__(self) -> str:
        return "SingleVolley()"


@dataclass
class BurstVolley(Volley):
    size: int
    interval: float
    escalation_per_shot: float
    shots_remaining: int = 0
    next_shot_in: float = 0.0

    mode = FireMode.BURST

    @classmethod
    def from_config(cls, config: WeaponConfig) -> "BurstVolley":
        return cls(
            size=config.burst_size,
            interval=config.burst_interval,
            escalation_per_shot=config.error_escalation_per_shot,
        )

    def start(self, weapon):
        weapon.fire_shot()
        self.next_shot_in = self.interval
        self.shots_remaining = self.size - 1
        if self.shots_remaining <= 0:
            weapon.stop()

    def tick(self, weapon, dt):
        self.next_shot_in -= dt
        if self.next_shot_in > 0.0:
            return
        weapon.error_escalation *= self.escalation_per_shot
        weapon.fire_shot()
        self.next_shot_in = self.interval
        self.shots_remaining -= 1
        if self.shots_remaining <= 0:
            weapon.stop()


@dataclass
class ContinuousVolley(Volley):
    duration: float
    time_remaining: float = 0.0

    mode = FireMode.CONTINUOUS

    @classmethod
    def from_config(cls, config: WeaponConfig) -> "ContinuousVolley":
        return cls(duration=config.max_continuous_duration)

    def start(self, weapon):
        self.time_remaining = self.duration
        weapon.start_continuous_effects()

    def tick(self, weapon, dt):
        self.time_remaining -= dt
        if self.time_remaining <= 0.0:
            weapon.stop()
        elif weapon.config.projectile_type is ProjectileType.HITSCAN:
            # One hitscan per tick; fire rate follows the driver's tick rate.
            weapon.fire_shot()

    def on_stop(self, weapon):
        weapon.stop_continuous_effects()


def volley_for(config: WeaponConfig) -> Volley:
    if config.fire_mode is FireMode.BURST:
        return BurstVolley.from_config(config)
    if config.fire_mode is FireMode.CONTINUOUS:
        return ContinuousVolley.from_config(config)
    return SingleVolley()


__all__ = ["Shot", "Volley", "SingleVolley", "BurstVolley", "ContinuousVolley", "volley_for"]
