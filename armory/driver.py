"""Fixed-step driver.

The game loop hands over variable frame time (``clock.tick(60) / 1000.0``);
the driver turns it into whole fixed steps and ticks, in order, every
registered weapon and then the projectile system. Everything runs on the
calling thread and each tick finishes before the next one starts.

    driver = FixedStepDriver(step=1 / 60, projectiles=ProjectileSystem(...))
    driver.add_weapon(rifle)
    while running:
        driver.advance(clock.tick(60) / 1000.0)

``advance`` runs at most ``max_steps_per_advance`` steps per call. Leftover
time beyond that is dropped (with a warning) so a long hitch cannot snowball
into an ever-growing backlog.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from armory.constants import DEFAULT_FIXED_STEP, DEFAULT_MAX_STEPS_PER_ADVANCE
from armory.errors import WeaponConfigError
from armory.logger import get_logger
from armory.projectile_system import ProjectileSystem
from armory.weapons.controller import WeaponController

log = get_logger("driver")


class FixedStepDriver:
    def __init__(
        self,
        step: float = DEFAULT_FIXED_STEP,
        projectiles: ProjectileSystem | None = None,
        max_steps_per_advance: int = DEFAULT_MAX_STEPS_PER_ADVANCE,
    ):
        if step <= 0:
            raise WeaponConfigError(f"fixed step must be > 0 (got {step!r})")
        if max_steps_per_advance < 1:
            raise WeaponConfigError(f"max_steps_per_advance must be >= 1 (got {max_steps_per_advance!r})")
        self.step_size = step
        self.projectiles = projectiles
        self.max_steps_per_advance = max_steps_per_advance
        self._weapons: List[WeaponController] = []
        self._accumulator = 0.0
        self.steps_run = 0
        self.last_summary: Optional[Dict[str, int]] = None

    @property
    def weapons(self) -> List[WeaponController]:
        return list(self._weapons)

    @property
    def pending_time(self) -> float:
        return self._accumulator

    def add_weapon(self, weapon: WeaponController) -> None:
        if weapon not in self._weapons:
            self._weapons.append(weapon)

    def remove_weapon(self, weapon: WeaponController) -> bool:
        try:
            self._weapons.remove(weapon)
        except ValueError:
            return False
        return True

    def step(self) -> None:
        for weapon in self._weapons:
            weapon.tick(self.step_size)
        if self.projectiles is not None:
            self.last_summary = self.projectiles.update(self.step_size)
        self.steps_run += 1

    def advance(self, elapsed: float) -> int:
        """Accumulate ``elapsed`` seconds and run whole steps; returns steps run."""
        if elapsed > 0:
            self._accumulator += elapsed
        ran = 0
        while self._accumulator >= self.step_size and ran < self.max_steps_per_advance:
            self.step()
            self._accumulator -= self.step_size
            ran += 1
        if self._accumulator >= self.step_size:
            log.warn(f"dropping {self._accumulator:.3f}s of simulation backlog after {ran} steps")
            self._accumulator = 0.0
        return ran


__all__ = ["FixedStepDriver"]
