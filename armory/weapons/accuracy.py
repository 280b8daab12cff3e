from __future__ import annotations

from typing import Tuple

from pygame.math import Vector3

from armory.rng_service import RNGService


def sample_angle_error(
    rng: RNGService, max_horizontal: float, max_vertical: float, escalation: float
) -> Tuple[float, float]:
    """Draw (horizontal, vertical) error in degrees, each uniform in [-max * escalation, +max * escalation].

    The two axes are sampled independently, horizontal first.
    """
    h_error = rng.symmetric(max_horizontal * escalation)
    v_error = rng.symmetric(max_vertical * escalation)
    return h_error, v_error


def apply_angle_error(forward: Vector3, h_error: float, v_error: float) -> Vector3:
    # Pitch about X (vertical error), then yaw about Y (horizontal error).
    return Vector3(forward).rotate_x(v_error).rotate_y(h_error)


__all__ = ["sample_angle_error", "apply_angle_error"]
