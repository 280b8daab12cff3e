"""Projectile lifetime, movement and ownership.

``ProjectileLifecycle`` is one spawned projectile. It walks
inactive -> active -> destroyed:

  * ``launch(direction, speed)`` arms it with ``max_lifetime`` seconds.
    In ENGINE physics mode the velocity is handed to the rigid-body port once
    and the engine moves the body; in CUSTOM mode the lifecycle integrates
    ``position += direction * speed * dt`` itself every tick (explicit Euler,
    straight line, no gravity or drag) and pushes the result with
    ``set_position``.
  * ``tick(dt)`` burns lifetime; at <= 0 the projectile is destroyed with
    reason LIFETIME and does not move on that step.
  * ``on_impact(event)`` reports the struck object and contact point and
    destroys the projectile with reason IMPACT.

Once destroyed, further ``tick`` / ``on_impact`` calls are silent no-ops, so a
projectile despawns exactly once no matter how the driver keeps calling it.
Ticks before launch are ignored as well.
Rigid-body port failures are logged and do not stop the lifecycle.

``ProjectileSystem`` is the subsystem that owns live projectiles after the
weapon hands them off. It implements the spawn port used by weapons, ticks
every live lifecycle once per ``update`` and drops destroyed ones. Engine glue
routes collision callbacks through ``report_impact(projectile_id, event)``.
The weapon never keeps a reference to what it spawned.

Public API:
    spawn(pose, kind) -> ProjectileLifecycle
    update(dt) -> summary dict {"expired", "impacts", "removed", "active"}
    report_impact(projectile_id, event) -> bool
    get(projectile_id) / iter() / len() / clear()
"""

from __future__ import annotations

import itertools
from typing import Any, Dict, Hashable, Iterator, Mapping, Optional

from pygame.math import Vector3

from armory.config import PhysicsMode, ProjectileConfig
from armory.logger import get_logger
from armory.services import (
    DespawnReason,
    ImpactEvent,
    ImpactObserver,
    LoggingObserver,
    MuzzlePose,
    RigidBodyPort,
    safe_notify_despawn,
    safe_notify_impact,
)

log = get_logger("projectile")


class ProjectileLifecycle:
    def __init__(
        self,
        config: ProjectileConfig,
        body: Any = None,
        physics: RigidBodyPort | None = None,
        observer: ImpactObserver | None = None,
        position: Vector3 | None = None,
        kind: str = "projectile",
    ):
        self.config = config
        self.body = body
        self.kind = kind
        self.physics = physics
        self.observer = observer
        self.position = Vector3(position) if position is not None else Vector3(0, 0, 0)
        self.direction = Vector3(0, 0, 0)
        self.speed = 0.0
        self.life_remaining: float | None = None
        self.destroyed = False
        self.despawn_reason: DespawnReason | None = None

    # --- Introspection -------------------------------------------------------
    @property
    def projectile_id(self) -> Hashable:
        return self.body

    @property
    def active(self) -> bool:
        return self.life_remaining is not None and not self.destroyed

    def __repr__(self) -> str:  # pragma: no cover - debug aid
        state = "destroyed" if self.destroyed else ("active" if self.active else "inactive")
        return f"<ProjectileLifecycle {self.kind}#{self.body} {state} life={self.life_remaining}>"

    # --- Requests ------------------------------------------------------------
    def launch(self, direction: Vector3, speed: float) -> None:
        if self.destroyed:
            log.warn(f"launch ignored on destroyed projectile {self.kind}#{self.body}")
            return
        self.life_remaining = self.config.max_lifetime
        # Assumed unit length; not re-normalized.
        self.direction = Vector3(direction)
        self.speed = speed
        if self.config.physics_mode is PhysicsMode.ENGINE and self.physics is not None:
            try:
                self.physics.apply_impulse(self.body, self.direction * self.speed)
            except Exception as exc:
                log.warn(f"impulse failed for {self.kind}#{self.body}: {exc!r}")
        log.debug(f"launch {self.kind}#{self.body} speed={speed} life={self.life_remaining}")

    def on_impact(self, event: ImpactEvent) -> bool:
        """Handle the first impact; returns False when already destroyed."""
        if self.destroyed:
            return False
        safe_notify_impact(self.observer, event.object_id, event.point, log)
        self._destroy(DespawnReason.IMPACT)
        return True

    # --- Simulation ----------------------------------------------------------
    def tick(self, dt: float) -> None:
        if not self.active:
            return
        self.life_remaining -= dt
        if self.life_remaining <= 0.0:
            self._destroy(DespawnReason.LIFETIME)
            return
        if self.config.physics_mode is PhysicsMode.CUSTOM:
            self._move(dt)

    def _move(self, dt: float) -> None:
        self.position += self.direction * self.speed * dt
        if self.physics is not None:
            try:
                self.physics.set_position(self.body, Vector3(self.position))
            except Exception as exc:
                log.warn(f"position sync failed for {self.kind}#{self.body}: {exc!r}")

    def _destroy(self, reason: DespawnReason) -> None:
        self.destroyed = True
        self.despawn_reason = reason
        log.debug(f"despawn {self.kind}#{self.body} ({reason.value})")
        safe_notify_despawn(self.observer, reason, log)


class ProjectileSystem:
    def __init__(
        self,
        configs: Mapping[str, ProjectileConfig] | None = None,
        physics: RigidBodyPort | None = None,
        observer: ImpactObserver | None = None,
    ):
        self.configs: Dict[str, ProjectileConfig] = dict(configs or {"projectile": ProjectileConfig()})
        self.physics = physics
        self.observer = observer if observer is not None else LoggingObserver()
        self._projectiles: Dict[int, ProjectileLifecycle] = {}
        self._ids = itertools.count(1)

    # --- Collection Protocol -------------------------------------------------
    def __len__(self) -> int:
        return len(self._projectiles)

    def __iter__(self) -> Iterator[ProjectileLifecycle]:
        return iter(list(self._projectiles.values()))

    def get(self, projectile_id: int) -> Optional[ProjectileLifecycle]:
        return self._projectiles.get(projectile_id)

    # --- API -----------------------------------------------------------------
    def spawn(self, pose: MuzzlePose, kind: str) -> ProjectileLifecycle:
        # Unknown kinds raise KeyError; the weapon treats that as an aborted spawn.
        config = self.configs[kind]
        projectile_id = next(self._ids)
        proj = ProjectileLifecycle(
            config,
            body=projectile_id,
            physics=self.physics,
            observer=self.observer,
            position=pose.position,
            kind=kind,
        )
        self._projectiles[projectile_id] = proj
        return proj

    def report_impact(self, projectile_id: int, event: ImpactEvent) -> bool:
        proj = self._projectiles.get(projectile_id)
        if proj is None:
            log.debug(f"impact for unknown projectile #{projectile_id} ignored")
            return False
        handled = proj.on_impact(event)
        if proj.destroyed:
            del self._projectiles[projectile_id]
        return handled

    def clear(self) -> None:
        self._projectiles.clear()

    # --- Simulation ----------------------------------------------------------
    def update(self, dt: float) -> Dict[str, int]:
        """Advance all projectiles one step.

        Returns a summary dict for instrumentation / tests. ``impacts`` counts
        projectiles found destroyed by impact that were still tracked (engine
        glue that calls ``on_impact`` directly instead of ``report_impact``).
        """
        expired = 0
        impacts = 0
        removed = 0
        for projectile_id, proj in list(self._projectiles.items()):
            proj.tick(dt)
            if proj.destroyed:
                if proj.despawn_reason is DespawnReason.LIFETIME:
                    expired += 1
                else:
                    impacts += 1
                del self._projectiles[projectile_id]
                removed += 1
        return {
            "expired": expired,
            "impacts": impacts,
            "removed": removed,
            "active": len(self._projectiles),
        }


__all__ = ["ProjectileLifecycle", "ProjectileSystem"]
