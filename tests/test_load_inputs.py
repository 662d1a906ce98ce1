import pytest

from vehicle_sim.load_inputs import load_input_trace_from_csv, make_constant_trace, sample_inputs, tick_times

CSV = """time_s,throttle,brake,steer,camera_toggle,respawn
0.0,0.2,0.0,0.0,0,0
1.0,0.8,0.0,1.5,1,0
2.0,0.0,1.2,-0.5,0,1
3.0,0.0,0.0,0.0,0,0
"""


@pytest.fixture
def trace_file(tmp_path):
    path = tmp_path / "drive.csv"
    path.write_text(CSV)
    return path


def test_load_trace(trace_file):
    trace = load_input_trace_from_csv(str(trace_file))
    assert trace.duration_s == 3.0
    assert list(trace.throttle) == [0.2, 0.8, 0.0, 0.0]
    # values are clamped to their ranges
    assert trace.steer[1] == 1.0
    assert trace.brake[2] == 1.0
    assert list(trace.camera_toggle) == [False, True, False, False]
    # optional columns default to zero
    assert not trace.camera_yaw.any()


def test_load_trace_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_input_trace_from_csv(str(tmp_path / "missing.csv"))

    bad = tmp_path / "bad.csv"
    bad.write_text("time_s,throttle\n0.0,1.0\n")
    with pytest.raises(ValueError, match="brake, steer"):
        load_input_trace_from_csv(str(bad))


def test_sample_holds_last_value(trace_file):
    trace = load_input_trace_from_csv(str(trace_file))
    assert sample_inputs(trace, 0.5, 0.1).throttle == pytest.approx(0.2)
    assert sample_inputs(trace, 1.0, 0.1).throttle == pytest.approx(0.8)
    assert sample_inputs(trace, 10.0, 0.1).brake == 0.0


def test_events_fire_once(trace_file):
    trace = load_input_trace_from_csv(str(trace_file))
    dt = 0.1
    samples = [sample_inputs(trace, i * dt, dt) for i in range(31)]
    assert sum(s.camera_toggle for s in samples) == 1
    assert sum(s.respawn for s in samples) == 1


def test_constant_trace():
    trace = make_constant_trace(5.0, throttle=0.5, steer=-0.2, toggle_times=(2.0,))
    assert trace.duration_s == 5.0
    assert list(trace.time_s) == [0.0, 2.0, 5.0]
    assert list(trace.camera_toggle) == [False, True, False]
    assert sample_inputs(trace, 3.0, 0.1).steer == pytest.approx(-0.2)


def test_tick_times_tile_the_trace():
    ticks = list(tick_times(2.0, 0.1))
    assert len(ticks) == 21
    assert ticks[0] == (-float("inf"), 0.0)
    # each window starts exactly where the previous one ended
    assert all(prev[1] == cur[0] for prev, cur in zip(ticks, ticks[1:]))
    assert ticks[-1][1] >= 2.0


@pytest.mark.parametrize("dt", [1 / 60, 1 / 30, 0.1, 0.05, 1 / 120])
@pytest.mark.parametrize("event_s", [0.25, 0.5, 1.0, 4.0, 8.05, 12.0, 16.1, 22.0, 25.0])
def test_event_on_tick_boundary_fires_once(dt, event_s):
    trace = make_constant_trace(25.0, toggle_times=(event_s,))
    fired = [
        t for t_prev, t in tick_times(trace.duration_s, dt)
        if sample_inputs(trace, t, dt, t_prev).camera_toggle
    ]
    assert len(fired) == 1
    assert event_s <= fired[0] < event_s + dt + 1e-9
