import pytest
import numpy as np
from milcook.config import bottle_height, lateral_surface_area, BOTTLE_RADIUS
from milcook.calculator import (
    newton_cooling,
    heat_transfer_coefficient,
    cooling_constant,
    time_to_target,
    estimate_time_to_target,
    mixed_temperature,
    water_volumes,
    cooling_rate,
    InvalidInputError,
    TimeOutcome,
)
from milcook.materials import get_material
from milcook.methods import get_cooling_method


def test_bottle_geometry():
    # 140 ml = 1.4e-4 m^3, pi * 0.035^2 = 3.848e-3 m^2 -> h = 0.03638 m
    h = bottle_height(140)
    assert abs(h - 1.4e-4 / (np.pi * BOTTLE_RADIUS ** 2)) < 1e-12
    assert abs(h - 0.03638) < 1e-4

    # Side area of a cylinder = 2V / r = 2 * 1.4e-4 / 0.035 = 0.008 m^2
    assert abs(lateral_surface_area(140) - 0.008) < 1e-9


def test_newton_cooling_initial_temperature():
    assert newton_cooling(80, 0, 20, 0.1) == 80
    assert newton_cooling(0.3, 0, 0.1, 0.5) == 0.3


def test_newton_cooling_approaches_ambient():
    temp1 = newton_cooling(80, 10, 20, 0.1)
    temp2 = newton_cooling(80, 20, 20, 0.1)
    temp3 = newton_cooling(80, 50, 20, 0.1)

    assert temp1 > temp2 > temp3 > 20
    # 20 + 60 * exp(-5) = 20.404
    assert abs(temp3 - 20.404) < 1e-3


def test_newton_cooling_never_below_ambient():
    result = newton_cooling(80, 1000, 20, 0.1)
    assert result >= 20
    assert abs(result - 20) < 0.1


def test_newton_cooling_zero_constant():
    assert newton_cooling(80, 10, 20, 0) == 80


def test_heat_transfer_coefficient():
    # ice_stir: 260 * sqrt(0.3 / 0.1 + 1) = 260 * 2 = 520
    assert abs(heat_transfer_coefficient(get_cooling_method("ice_stir")) - 520.0) < 1e-9
    # Still water: no velocity correction
    assert heat_transfer_coefficient(get_cooling_method("ice_still")) == 158.0


def test_cooling_constant_value():
    # h = 520, A = 0.008 m^2, m = 140 / 1000 * 1000 = 140
    # V / 1000 is litres but rho is per m^3, so m is 1000x the mass in kg
    # k = 520 * 0.008 * 1.0 / (140 * 4186) * 60 = 4.2591e-4 /min
    k = cooling_constant(140, get_material("glass"), get_cooling_method("ice_stir"))
    assert abs(k - 4.2591e-4) < 1e-7


def test_cooling_constant_material_effect():
    method = get_cooling_method("ice_stir")
    k_glass = cooling_constant(140, get_material("glass"), method)
    k_plastic = cooling_constant(140, get_material("plastic"), method)
    k_ppsu = cooling_constant(140, get_material("ppsu"), method)

    assert k_glass > k_plastic > k_ppsu > 0


def test_cooling_constant_method_effect():
    material = get_material("glass")
    k_stir = cooling_constant(140, material, get_cooling_method("ice_stir"))
    k_still = cooling_constant(140, material, get_cooling_method("ice_still"))
    k_air = cooling_constant(140, material, get_cooling_method("air"))

    assert k_stir > k_still > k_air > 0


def test_cooling_constant_volume_independent():
    # A / m = (2V / r) / (rho V) for a fixed radius cylinder
    material = get_material("glass")
    method = get_cooling_method("ice_stir")
    k100 = cooling_constant(100, material, method)
    k200 = cooling_constant(200, material, method)
    assert abs(k100 - k200) < 1e-9


def test_time_to_target_already_reached():
    assert time_to_target(38, 40, 20, 0.1) == 0
    assert time_to_target(40, 40, 20, 0.1) == 0


def test_time_to_target_unreachable():
    assert time_to_target(80, 20, 20, 0.1) == np.inf
    assert time_to_target(80, 15, 20, 0.1) == np.inf


def test_time_to_target_typical():
    # -ln(20 / 60) / 0.1 = 10.986 min
    t = time_to_target(80, 40, 20, 0.1)
    assert abs(t - 10.986) < 1e-3


def test_time_to_target_smaller_constant_takes_longer():
    assert time_to_target(80, 40, 20, 0.1) > time_to_target(80, 40, 20, 0.2)


@pytest.mark.parametrize("t0, target, ambient, k", [
    (80, 40, 20, 0.1),
    (70.14, 38, 2, 0.426),
    (62, 38, 20, 0.0137),
])
def test_time_to_target_inverts_newton_cooling(t0, target, ambient, k):
    t = time_to_target(t0, target, ambient, k)
    assert abs(newton_cooling(t0, t, ambient, k) - target) < 0.1


def test_estimate_time_to_target_outcomes():
    assert estimate_time_to_target(38, 40, 20, 0.1).outcome is TimeOutcome.REACHED

    unreachable = estimate_time_to_target(80, 15, 20, 0.1)
    assert unreachable.outcome is TimeOutcome.UNREACHABLE
    assert unreachable.minutes is None
    assert not unreachable.is_reachable

    estimate = estimate_time_to_target(80, 40, 20, 0.1)
    assert estimate.outcome is TimeOutcome.DURATION
    assert abs(estimate.minutes - 10.986) < 1e-3


def test_mixed_temperature():
    assert mixed_temperature(80, 100, 20, 0) == 80
    assert mixed_temperature(80, 0, 20, 100) == 20
    assert mixed_temperature(80, 100, 20, 100) == 50


def test_water_volumes_bounds():
    assert water_volumes(140, 85, 20, 85) == (140, 0)
    assert water_volumes(140, 85, 20, 20) == (0, 140)


def test_water_volumes_typical():
    # 140 * (70 - 20) / (85 - 20) = 107.69 -> 108 hot, 32 cold
    split = water_volumes(140, 85, 20, 70)
    assert split.hot == 108
    assert split.cold == 32

    # Mixing the rounded split lands within 1 degC of the target
    assert abs(mixed_temperature(85, split.hot, 20, split.cold) - 70) < 1.0


@pytest.mark.parametrize("total, cold_temp, target", [
    (140, 20, 70), (100, 25, 70), (200, 20, 65), (60, 30, 70), (75, 20, 52.5),
])
def test_water_volumes_sum_to_total(total, cold_temp, target):
    split = water_volumes(total, 85, cold_temp, target)
    assert split.hot + split.cold == total
    assert split.hot == int(split.hot)


def test_water_volumes_fractional_total():
    # 140.4 * 50 / 65 = 108.0 hot, 140 - 108 = 32 cold
    assert water_volumes(140.4, 85, 20, 70) == (108, 32)
    # 140.6 * 50 / 65 = 108.15 hot, 141 - 108 = 33 cold
    split = water_volumes(140.6, 85, 20, 70)
    assert split == (108, 33)
    assert isinstance(split.cold, int)


def test_water_volumes_rounds_half_up():
    # 3 * (52.5 - 20) / (85 - 20) = 1.5 -> 2 hot, 1 cold
    assert water_volumes(3, 85, 20, 52.5) == (2, 1)


def test_water_volumes_equal_temperatures():
    with pytest.raises(InvalidInputError):
        water_volumes(140, 50, 50, 50)


def test_cooling_rate():
    assert cooling_rate(20, 20, 0.1) == 0
    assert cooling_rate(20, 20, 5.0) == 0
    # -0.1 * (80 - 20) = -6 degC/min
    assert abs(cooling_rate(80, 20, 0.1) - (-6.0)) < 1e-9
    assert cooling_rate(21, 20, 0.01) < 0
