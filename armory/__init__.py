"""armory: weapon firing state machines and projectile lifecycles.

The core is engine agnostic; raycasts, prefab spawning and rigid bodies are
reached through the ports in ``armory.services``.
"""

from armory.config import (
    FireMode,
    PhysicsMode,
    ProjectileConfig,
    ProjectileType,
    WeaponConfig,
    load_projectile_configs,
    load_weapon_configs,
)
from armory.driver import FixedStepDriver
from armory.errors import WeaponConfigError
from armory.projectile_system import ProjectileLifecycle, ProjectileSystem
from armory.services import DespawnReason, ImpactEvent, MuzzlePose, RayHit, WeaponServices
from armory.weapons import WeaponController, WeaponState

__all__ = [
    "FireMode",
    "PhysicsMode",
    "ProjectileConfig",
    "ProjectileType",
    "WeaponConfig",
    "WeaponConfigError",
    "load_projectile_configs",
    "load_weapon_configs",
    "FixedStepDriver",
    "ProjectileLifecycle",
    "ProjectileSystem",
    "DespawnReason",
    "ImpactEvent",
    "MuzzlePose",
    "RayHit",
    "WeaponServices",
    "WeaponController",
    "WeaponState",
]
