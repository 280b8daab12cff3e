"""Weapon and projectile tuning defaults.

Single home for the default values a ``WeaponConfig`` / ``ProjectileConfig``
falls back to when a field is omitted, so archetype JSON files only need to
list what differs. Angles are in degrees, times in seconds, distances in
world units.
"""

# Common
DEFAULT_MAX_WEAPON_RANGE = 50.0  # hitscan ray length
DEFAULT_END_OF_FIRE_COOLDOWN = 0.0  # pause after any stop before next trigger pull
DEFAULT_HIT_MASK = -1  # ray-query filter; all bits set hits every layer

# Projectile launch
DEFAULT_PROJECTILE_LAUNCH_SPEED = 20.0
DEFAULT_PROJECTILE_KIND = "projectile"  # prefab kind handed to the spawner
DEFAULT_PROJECTILE_MAX_LIFETIME = 30.0

# Burst
DEFAULT_BURST_SIZE = 3
DEFAULT_BURST_INTERVAL = 0.25
DEFAULT_ERROR_ESCALATION_PER_SHOT = 1.5

# Continuous
DEFAULT_MAX_CONTINUOUS_DURATION = 5.0

# Accuracy
DEFAULT_MAX_HORIZONTAL_ANGLE_ERROR = 1.0
DEFAULT_MAX_VERTICAL_ANGLE_ERROR = 1.0
BASE_ERROR_ESCALATION = 1.0  # value restored on every stop

# Driver
DEFAULT_FIXED_STEP = 1.0 / 60.0
DEFAULT_MAX_STEPS_PER_ADVANCE = 8  # spiral-of-death guard

__all__ = [name for name in globals().keys() if name.isupper()]
