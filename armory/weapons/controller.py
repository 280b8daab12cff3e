"""Weapon firing state machine.

States::

    READY_TO_FIRE --request_start_firing--> FIRING
    FIRING --request_stop_firing / volley exhausted--> COOLING_DOWN
    COOLING_DOWN --cooldown elapsed (tick)--> READY_TO_FIRE

Entering FIRING starts a fresh volley for the configured fire mode (see
``armory.weapons.base``). Single fire and a burst of one stop again inside the
same ``request_start_firing`` call, so the caller observes COOLING_DOWN
immediately.

Request handlers never raise. They return whether the requested transition
was legal in the current state:

    request_start_firing  True only from READY_TO_FIRE
    request_stop_firing   True from FIRING (stops) and COOLING_DOWN (no-op),
                          False from READY_TO_FIRE

A shot samples angular error scaled by ``error_escalation`` and then either
runs a ray query (hitscan) or spawns and launches a projectile. Collaborator
failures count as "no hit" / "spawn aborted" and are logged; they never leave
the volley timers half-updated. The spawned projectile is handed off to the
spawn port's owner and not retained here.
"""

from __future__ import annotations

from enum import Enum
from typing import Hashable, Optional, Tuple

from pygame.math import Vector3

from armory.config import ProjectileType, WeaponConfig
from armory.constants import BASE_ERROR_ESCALATION
from armory.errors import WeaponConfigError
from armory.logger import get_logger
from armory.rng_service import RNGService
from armory.services import MuzzlePose, RayHit, WeaponServices, safe_notify_impact

from .accuracy import apply_angle_error, sample_angle_error
from .base import BurstVolley, ContinuousVolley, Shot, Volley, volley_for

log = get_logger("weapon")


class WeaponState(Enum):
    READY_TO_FIRE = "ready_to_fire"
    FIRING = "firing"
    COOLING_DOWN = "cooling_down"


class WeaponController:
    def __init__(
        self,
        config: WeaponConfig,
        services: WeaponServices,
        rng: RNGService | None = None,
        name: str = "weapon",
    ):
        if config.projectile_type is ProjectileType.HITSCAN and services.ray_query is None:
            raise WeaponConfigError(f"{name}: hitscan weapon needs a ray query provider")
        if config.projectile_type is ProjectileType.PROJECTILE and services.projectiles is None:
            raise WeaponConfigError(f"{name}: projectile weapon needs a projectile spawner")
        self.config = config
        self.services = services
        self.rng = rng if rng is not None else RNGService.get()
        self.name = name

        self._state = WeaponState.READY_TO_FIRE
        self._volley: Volley | None = None
        self._cooldown_remaining: float | None = None
        self.error_escalation = BASE_ERROR_ESCALATION
        self.shots_fired = 0
        self.last_shot: Shot | None = None

    # --- Introspection -------------------------------------------------------
    @property
    def state(self) -> WeaponState:
        return self._state

    @property
    def volley(self) -> Volley | None:
        return self._volley

    @property
    def cooldown_remaining(self) -> float | None:
        return self._cooldown_remaining

    @property
    def burst_shots_remaining(self) -> int | None:
        return self._volley.shots_remaining if isinstance(self._volley, BurstVolley) else None

    @property
    def next_burst_shot_in(self) -> float | None:
        return self._volley.next_shot_in if isinstance(self._volley, BurstVolley) else None

    @property
    def continuous_time_remaining(self) -> float | None:
        return self._volley.time_remaining if isinstance(self._volley, ContinuousVolley) else None

    def __repr__(self) -> str:  # pragma: no cover - debug aid
        return f"<WeaponController {self.name} {self._state.value} volley={self._volley!r}>"

    # --- Requests ------------------------------------------------------------
    def request_start_firing(self) -> bool:
        if self._state is not WeaponState.READY_TO_FIRE:
            return False
        self._state = WeaponState.FIRING
        self._volley = volley_for(self.config)
        log.debug(f"{self.name}: start firing ({self._volley.mode.value})")
        self._volley.start(self)
        return True

    def request_stop_firing(self) -> bool:
        if self._state is WeaponState.FIRING:
            self.stop()
            return True
        return self._state is WeaponState.COOLING_DOWN

    # --- Simulation ----------------------------------------------------------
    def tick(self, dt: float) -> None:
        if self._state is WeaponState.FIRING:
            self._volley.tick(self, dt)
        elif self._state is WeaponState.COOLING_DOWN:
            self._tick_cooldown(dt)

    def _tick_cooldown(self, dt: float) -> None:
        self._cooldown_remaining -= dt
        if self._cooldown_remaining <= 0.0:
            self._state = WeaponState.READY_TO_FIRE
            self._cooldown_remaining = None
            log.debug(f"{self.name}: ready")

    # --- Volley callbacks ----------------------------------------------------
    def stop(self) -> None:
        """FIRING -> COOLING_DOWN. Clears volley timers and accuracy escalation."""
        volley = self._volley
        if volley is not None:
            volley.on_stop(self)
        self._state = WeaponState.COOLING_DOWN
        self._volley = None
        self._cooldown_remaining = self.config.end_of_fire_cooldown
        self.error_escalation = BASE_ERROR_ESCALATION
        log.debug(f"{self.name}: cooling down for {self._cooldown_remaining}s")

    def start_continuous_effects(self) -> None:
        self._call_effects("start_continuous_fire")
        if self.config.projectile_type is ProjectileType.HITSCAN:
            self.fire_shot()

    def stop_continuous_effects(self) -> None:
        self._call_effects("stop_continuous_fire")

    def _call_effects(self, hook: str) -> None:
        effects = self.services.effects
        if effects is None:
            return
        try:
            getattr(effects, hook)()
        except Exception as exc:
            log.warn(f"{self.name}: effects hook {hook} failed: {exc!r}")

    def fire_shot(self) -> Shot:
        h_error, v_error = sample_angle_error(
            self.rng,
            self.config.max_horizontal_angle_error,
            self.config.max_vertical_angle_error,
            self.error_escalation,
        )
        muzzle = self.services.muzzle
        direction = apply_angle_error(muzzle.forward, h_error, v_error)
        hit = None
        spawned = False
        projectile_id = None
        if self.config.projectile_type is ProjectileType.HITSCAN:
            hit = self._fire_hitscan(Vector3(muzzle.position), direction)
        else:
            pose = MuzzlePose(Vector3(muzzle.position), Vector3(muzzle.forward))
            spawned, projectile_id = self._fire_projectile(pose, direction)
        self.shots_fired += 1
        shot = Shot(
            index=self.shots_fired,
            projectile_type=self.config.projectile_type,
            direction=direction,
            escalation=self.error_escalation,
            h_error=h_error,
            v_error=v_error,
            hit=hit,
            spawned=spawned,
            projectile_id=projectile_id,
        )
        self.last_shot = shot
        return shot

    def _fire_hitscan(self, origin: Vector3, direction: Vector3) -> Optional[RayHit]:
        try:
            hit = self.services.ray_query.ray_query(origin, direction, self.config.max_range, self.config.hit_mask)
        except Exception as exc:
            log.warn(f"{self.name}: ray query failed, treating as miss: {exc!r}")
            return None
        if hit is not None:
            self.on_hit(hit)
        return hit

    def _fire_projectile(self, pose: MuzzlePose, direction: Vector3) -> Tuple[bool, Optional[Hashable]]:
        try:
            handle = self.services.projectiles.spawn(pose, self.config.projectile_kind)
            handle.launch(direction, self.config.projectile_launch_speed)
        except Exception as exc:
            log.warn(f"{self.name}: projectile spawn aborted: {exc!r}")
            return False, None
        return True, getattr(handle, "projectile_id", None)

    def on_hit(self, hit: RayHit) -> None:
        safe_notify_impact(self.services.observer, hit.object_id, hit.point, log)


__all__ = ["WeaponState", "WeaponController"]
