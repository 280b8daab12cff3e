"""Weapon firing package.

``WeaponController`` runs the Ready / Firing / CoolingDown state machine for
one weapon; fire-mode specifics live in the volley variants of ``base``.
Named archetypes can be registered and instantiated through ``registry``.
"""

from armory.config import WeaponConfig

from .base import BurstVolley, ContinuousVolley, Shot, SingleVolley, Volley
from .controller import WeaponController, WeaponState
from .registry import build_weapon, get_weapon, list_weapons, load_archetypes, register_weapon

# Built-in archetype, always available.
register_weapon("default", WeaponConfig())

__all__ = [
    "WeaponController",
    "WeaponState",
    "Shot",
    "Volley",
    "SingleVolley",
    "BurstVolley",
    "ContinuousVolley",
    "build_weapon",
    "get_weapon",
    "list_weapons",
    "load_archetypes",
    "register_weapon",
]
