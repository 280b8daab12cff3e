import pytest
from pygame.math import Vector3

from armory.config import FireMode, ProjectileConfig, WeaponConfig
from armory.driver import FixedStepDriver
from armory.errors import WeaponConfigError
from armory.projectile_system import ProjectileSystem
from armory.rng_service import RNGService
from armory.services import MuzzlePose, WeaponServices
from armory.weapons import WeaponController, WeaponState


class CountingRayQuery:
    def __init__(self):
        self.count = 0

    def ray_query(self, origin, direction, max_distance, mask):
        self.count += 1
        return None


def make_beam(duration=1.0):
    config = WeaponConfig(fire_mode=FireMode.CONTINUOUS, max_continuous_duration=duration)
    ray = CountingRayQuery()
    weapon = WeaponController(config, WeaponServices(muzzle=MuzzlePose(), ray_query=ray), rng=RNGService(3))
    return weapon, ray


def test_step_ticks_weapons_and_projectiles():
    system = ProjectileSystem({"bolt": ProjectileConfig(max_lifetime=0.5)})
    system.spawn(MuzzlePose(), "bolt").launch(Vector3(0, 0, 1), 1.0)
    weapon, ray = make_beam()
    driver = FixedStepDriver(step=0.25, projectiles=system)
    driver.add_weapon(weapon)
    weapon.request_start_firing()

    driver.step()
    assert ray.count == 2
    assert driver.last_summary["active"] == 1
    driver.step()
    assert driver.last_summary["expired"] == 1
    assert driver.steps_run == 2


def test_advance_runs_whole_steps_and_keeps_remainder():
    weapon, ray = make_beam(duration=10.0)
    driver = FixedStepDriver(step=0.25)
    driver.add_weapon(weapon)
    weapon.request_start_firing()
    assert driver.advance(0.625) == 2
    assert driver.pending_time == pytest.approx(0.125)
    assert driver.advance(0.125) == 1
    assert ray.count == 4


def test_advance_caps_steps_and_drops_backlog():
    driver = FixedStepDriver(step=0.25, max_steps_per_advance=2)
    assert driver.advance(10.0) == 2
    assert driver.pending_time == 0.0


def test_continuous_weapon_stops_under_driver():
    weapon, ray = make_beam(duration=1.0)
    driver = FixedStepDriver(step=0.25)
    driver.add_weapon(weapon)
    weapon.request_start_firing()
    for _ in range(6):
        driver.step()
    assert weapon.state is WeaponState.READY_TO_FIRE
    assert ray.count == 4


def test_add_and_remove_weapons():
    weapon, _ = make_beam()
    driver = FixedStepDriver()
    driver.add_weapon(weapon)
    driver.add_weapon(weapon)
    assert driver.weapons == [weapon]
    assert driver.remove_weapon(weapon) is True
    assert driver.remove_weapon(weapon) is False


def test_invalid_step_rejected():
    with pytest.raises(WeaponConfigError):
        FixedStepDriver(step=0.0)
    with pytest.raises(WeaponConfigError):
        FixedStepDriver(max_steps_per_advance=0)
