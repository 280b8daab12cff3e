from __future__ import annotations

import os
from typing import Dict, List, Optional

from armory.config import WeaponConfig, load_weapon_configs
from armory.rng_service import RNGService
from armory.services import WeaponServices

from .controller import WeaponController

_registry: Dict[str, WeaponConfig] = {}


def register_weapon(name: str, config: WeaponConfig) -> None:
    _registry[name] = config


def get_weapon(name: str) -> Optional[WeaponConfig]:
    return _registry.get(name)


def list_weapons() -> List[str]:
    return sorted(_registry.keys())


def unregister_weapon(name: str) -> None:
    _registry.pop(name, None)


def load_archetypes(path: str | os.PathLike) -> List[str]:
    """Register every weapon in a config file; returns the registered names."""
    configs = load_weapon_configs(path)
    for name, config in configs.items():
        register_weapon(name, config)
    return list(configs)


def build_weapon(name: str, services: WeaponServices, rng: RNGService | None = None) -> WeaponController:
    config = _registry.get(name)
    if config is None:
        raise KeyError(f"unknown weapon archetype {name!r}")
    return WeaponController(config, services, rng=rng, name=name)
