import json
import math

import numpy as np
import pytest

from vehicle_sim.sound import SoundState
from vehicle_sim.utils import check_interval, export_log_csv, normalize_angle, save_log_to_json, wrap


@pytest.mark.parametrize("angle", np.linspace(-50.0, 50.0, 401))
def test_normalize_angle_range(angle):
    a = normalize_angle(angle)
    assert -math.pi < a <= math.pi


def test_normalize_angle_boundaries():
    assert normalize_angle(math.pi) == math.pi
    assert normalize_angle(-math.pi) == pytest.approx(math.pi)
    assert normalize_angle(0.0) == 0.0


@pytest.mark.parametrize("theta", [0.3, -2.0, 1.5, 3.0])
@pytest.mark.parametrize("k", [-3, -1, 1, 4])
def test_normalize_angle_periodic(theta, k):
    assert normalize_angle(theta + 2 * math.pi * k) == pytest.approx(normalize_angle(theta), abs=1e-9)


@pytest.mark.parametrize("angle", [-12.0, -3.5, 0.7, 4.0, 25.0])
def test_normalize_angle_idempotent(angle):
    once = normalize_angle(angle)
    assert normalize_angle(once) == once


def test_wrap_inside_interval_untouched():
    assert wrap(0.5, -math.pi, math.pi) == 0.5
    # both ends are accepted as-is
    assert wrap(math.pi, -math.pi, math.pi) == math.pi
    assert wrap(-math.pi, -math.pi, math.pi) == -math.pi


@pytest.mark.parametrize("x,low,high", [
    (4.0, -math.pi, math.pi),
    (-4.0, -math.pi, math.pi),
    (-7.0, 0.0, 5.0),
    (23.0, 0.0, 5.0),
    (100.0, -1.0, 1.0),
])
def test_wrap_outside_interval(x, low, high):
    w = wrap(x, low, high)
    period = high - low
    assert low <= w < high
    k = (x - w) / period
    assert k == pytest.approx(round(k))


def test_wrap_examples():
    assert wrap(4.0, -math.pi, math.pi) == pytest.approx(4.0 - 2 * math.pi)
    assert wrap(-7.0, 0.0, 5.0) == pytest.approx(3.0)


def test_check_interval():
    assert check_interval(-1.0, 1.0) == (-1.0, 1.0)
    with pytest.raises(ValueError):
        check_interval(1.0, 1.0)
    with pytest.raises(ValueError):
        check_interval(2.0, -2.0)


def test_log_export(tmp_path, capsys):
    log = {
        "time": [0.0, 0.1],
        "v": [np.float64(1.5), np.float64(2.0)],
        "sound_state": [SoundState.NORMAL, SoundState.THROTTLE],
    }

    json_file = tmp_path / "log.json"
    save_log_to_json(log, str(json_file))
    data = json.loads(json_file.read_text())
    assert data["v"] == [1.5, 2.0]
    assert data["sound_state"] == ["NORMAL", "THROTTLE"]

    csv_file = tmp_path / "telemetry.csv"
    export_log_csv(log, str(csv_file))
    lines = csv_file.read_text().splitlines()
    assert lines[0] == "time,v,sound_state"
    assert lines[2] == "0.1,2.0,THROTTLE"

    out = capsys.readouterr().out
    assert "saved to" in out
