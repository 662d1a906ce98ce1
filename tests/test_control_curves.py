import math

import numpy as np
import pytest

from config import car_config
from vehicle_sim.control_curves import (
    calculate_acceleration,
    calculate_deceleration,
    longitudinal_acceleration,
)


def test_acceleration_values():
    assert calculate_acceleration(1.0, 0.0) == pytest.approx(5.0)
    assert calculate_acceleration(1.0, car_config["max_speed"]) == pytest.approx(0.0)
    # drag-like above max speed
    assert calculate_acceleration(1.0, 40.0) < 0.0


@pytest.mark.parametrize("v", [0.0, 5.0, 20.0, 50.0])
def test_acceleration_zero_without_throttle(v):
    assert calculate_acceleration(0.0, v) == 0.0


@pytest.mark.parametrize("throttle", [0.1, 0.5, 1.0])
def test_acceleration_non_increasing_in_speed(throttle):
    speeds = np.linspace(0.0, 40.0, 81)
    values = [calculate_acceleration(throttle, v) for v in speeds]
    assert all(b <= a for a, b in zip(values, values[1:]))


def test_acceleration_linear_in_throttle():
    assert calculate_acceleration(0.5, 10.0) == pytest.approx(0.5 * calculate_acceleration(1.0, 10.0))


@pytest.mark.parametrize("v", [-1.0, 0.0, 0.1, 10.0, 30.0])
def test_no_deceleration_without_brake(v):
    assert calculate_deceleration(0.0, v) == 0.0


def test_deceleration_curve_shape():
    # half force at the curve midpoint
    assert calculate_deceleration(0.4, 10.0) == pytest.approx(-2.5)
    full = calculate_deceleration(1.0, 10.0)
    assert full == pytest.approx(-5.0 / (1.0 + math.exp(-7.0 * 0.6)))
    assert -5.0 < full < -4.9


def test_deceleration_monotonic_in_brake():
    pedal = np.linspace(0.0, 1.0, 51)
    values = [calculate_deceleration(b, 10.0) for b in pedal]
    assert all(b < a for a, b in zip(values, values[1:]))


def test_deceleration_fades_near_standstill():
    assert calculate_deceleration(1.0, 0.1) == pytest.approx(0.5 * calculate_deceleration(1.0, 10.0))
    assert calculate_deceleration(1.0, 0.2) == pytest.approx(calculate_deceleration(1.0, 10.0))
    assert calculate_deceleration(1.0, 0.0) == 0.0


def test_throttle_and_brake_add_up():
    total = longitudinal_acceleration(0.7, 0.6, 12.0)
    assert total == pytest.approx(calculate_acceleration(0.7, 12.0) + calculate_deceleration(0.6, 12.0))
