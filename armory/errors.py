from __future__ import annotations


class WeaponConfigError(ValueError):
    """Raised when a weapon or projectile configuration is rejected.

    Bad values are never clamped; a design-time mistake should fail loudly
    at construction or load time.
    """


__all__ = ["WeaponConfigError"]
