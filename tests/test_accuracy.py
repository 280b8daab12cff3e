import pytest
from pygame.math import Vector3

from armory.rng_service import RNGService
from armory.weapons.accuracy import apply_angle_error, sample_angle_error


def test_zero_error_keeps_forward():
    assert apply_angle_error(Vector3(0, 0, 1), 0.0, 0.0) == Vector3(0, 0, 1)


def test_yaw_rotates_in_horizontal_plane():
    d = apply_angle_error(Vector3(0, 0, 1), 90.0, 0.0)
    assert d.y == pytest.approx(0.0, abs=1e-9)
    assert abs(d.x) == pytest.approx(1.0)
    assert d.z == pytest.approx(0.0, abs=1e-9)


def test_pitch_rotates_in_vertical_plane():
    d = apply_angle_error(Vector3(0, 0, 1), 0.0, 30.0)
    assert d.x == pytest.approx(0.0, abs=1e-9)
    assert abs(d.y) == pytest.approx(0.5)
    assert d.length() == pytest.approx(1.0)


def test_forward_is_not_mutated():
    forward = Vector3(0, 0, 1)
    apply_angle_error(forward, 10.0, 10.0)
    assert forward == Vector3(0, 0, 1)


def test_samples_respect_escalated_limits():
    rng = RNGService(99)
    for escalation in (1.0, 1.5, 2.25):
        for _ in range(200):
            h, v = sample_angle_error(rng, 1.0, 2.0, escalation)
            assert -1.0 * escalation <= h <= 1.0 * escalation
            assert -2.0 * escalation <= v <= 2.0 * escalation


def test_zero_limits_sample_exact_zero():
    assert sample_angle_error(RNGService(5), 0.0, 0.0, 3.0) == (0.0, 0.0)


def test_sampling_is_deterministic_for_a_seed():
    a = [sample_angle_error(RNGService(42), 1.0, 1.0, 1.0) for _ in range(3)]
    b = [sample_angle_error(RNGService(42), 1.0, 1.0, 1.0) for _ in range(3)]
    assert a == b
