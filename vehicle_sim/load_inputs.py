import pathlib

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from dataclasses import dataclass

REQUIRED_COLUMNS = ("time_s", "throttle", "brake", "steer")


@dataclass
class DriverInput:
    """Normalized driver input for one tick."""
    throttle: float = 0.0        # [0, 1]
    brake: float = 0.0           # [0, 1]
    steer: float = 0.0           # [-1, 1], positive = left
    camera_toggle: bool = False
    camera_yaw: float = 0.0      # manual orbit nudge [-1, 1]
    camera_pitch: float = 0.0    # manual orbit nudge [-1, 1]
    respawn: bool = False


@dataclass
class InputTrace:
    time_s: np.ndarray
    throttle: np.ndarray
    brake: np.ndarray
    steer: np.ndarray
    camera_toggle: np.ndarray
    camera_yaw: np.ndarray
    camera_pitch: np.ndarray
    respawn: np.ndarray
    duration_s: float


def _trace_from_frame(df):
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"input trace is missing columns: {', '.join(missing)}")

    df = df.sort_values("time_s", kind="stable").reset_index(drop=True)
    n = len(df)
    if n == 0:
        raise ValueError("input trace is empty")

    def column(name, dtype=float):
        if name in df.columns:
            return df[name].fillna(0).to_numpy(dtype)
        return np.zeros(n, dtype=dtype)

    time_s = column("time_s")
    return InputTrace(
        time_s=time_s,
        throttle=np.clip(column("throttle"), 0.0, 1.0),
        brake=np.clip(column("brake"), 0.0, 1.0),
        steer=np.clip(column("steer"), -1.0, 1.0),
        camera_toggle=column("camera_toggle", bool),
        camera_yaw=np.clip(column("camera_yaw"), -1.0, 1.0),
        camera_pitch=np.clip(column("camera_pitch"), -1.0, 1.0),
        respawn=column("respawn", bool),
        duration_s=float(time_s[-1]),
    )


def load_input_trace_from_csv(file_path="sample_drive.csv", sep=",") -> InputTrace:
    """
    Load a recorded driver input trace.

    Columns: time_s, throttle, brake, steer and optionally camera_toggle,
    camera_yaw, camera_pitch, respawn.
    """
    if not pathlib.Path(file_path).exists():
        raise FileNotFoundError(f"input trace {file_path} not found")
    df = pd.read_csv(file_path, sep=sep)
    return _trace_from_frame(df)


def make_constant_trace(duration_s, throttle=0.0, brake=0.0, steer=0.0,
                        toggle_times=()) -> InputTrace:
    """
    Synthetic trace holding the same pedal/steer values for duration_s,
    with camera toggles at the given times.
    """
    times = sorted({0.0, float(duration_s), *map(float, toggle_times)})
    df = pd.DataFrame({
        "time_s": times,
        "throttle": throttle,
        "brake": brake,
        "steer": steer,
        "camera_toggle": [t in set(map(float, toggle_times)) for t in times],
    })
    return _trace_from_frame(df)


def tick_times(duration_s, dt):
    """
    Yield (t_prev, t) for every tick covering [0, duration_s].

    t_prev of one tick is the very same float as t of the tick before, so the
    event windows (t_prev, t] tile the time line without gaps or overlaps.
    The first window is open to the left.
    """
    n_steps = int(np.floor(duration_s / dt)) + 1
    # rounding can leave the last tick just short of the final sample
    if (n_steps - 1) * dt < duration_s:
        n_steps += 1
    t_prev = -np.inf
    for i in range(n_steps):
        t = i * dt
        yield t_prev, t
        t_prev = t


def sample_inputs(trace, t, dt, t_prev=None):
    """
    Driver input at time t.

    Axis values hold the last sample at or before t. Events (camera toggle,
    respawn) fire when any sample in (t_prev, t] is flagged; t_prev defaults
    to t - dt. Pass the previous tick time when stepping through a trace.
    """
    if t_prev is None:
        t_prev = t - dt
    idx = int(np.searchsorted(trace.time_s, t, side="right")) - 1
    idx = max(idx, 0)

    window = (trace.time_s > t_prev) & (trace.time_s <= t)

    return DriverInput(
        throttle=float(trace.throttle[idx]),
        brake=float(trace.brake[idx]),
        steer=float(trace.steer[idx]),
        camera_toggle=bool(np.any(trace.camera_toggle[window])),
        camera_yaw=float(trace.camera_yaw[idx]),
        camera_pitch=float(trace.camera_pitch[idx]),
        respawn=bool(np.any(trace.respawn[window])),
    )


# =========================================================
# ================== Plotting Functions ===================
# =========================================================

def plot_trajectory(log, show_start=True):

    plt.figure(figsize=(6, 6))
    plt.plot(log["x"], log["y"], linewidth=1.5)

    if show_start and log["x"]:
        plt.scatter(log["x"][0], log["y"][0], color="red")
        plt.text(log["x"][0], log["y"][0], " START", fontsize=8)

    plt.gca().set_aspect("equal", "box")
    plt.xlabel("x [m]")
    plt.ylabel("y [m]")
    plt.title("Vehicle Trajectory")
    plt.grid(True)
    plt.show()


def animate_car_with_telemetry(log, cfg, frame_step=10):
    plt.figure(figsize=(7,7))

    v_values = np.array(log["v"])
    throttle_values = np.array(log["throttle"])
    brake_values = np.array(log["brake"])
    steer_values = np.array(log["front_wheel_angle"])
    wheelbase = cfg["wheelbase_m"]

    for i in range(0, len(log["x"]), frame_step):

        plt.clf()

        # --- Path so far ---
        plt.plot(log["x"][:i], log["y"][:i], 'b-', linewidth=1.2, label="Car path")

        # --- Car body as a wheelbase-long arrow ---
        x, y, yaw = log["x"][i], log["y"][i], log["yaw"][i]
        plt.arrow(x, y, wheelbase * np.cos(yaw), wheelbase * np.sin(yaw),
                  head_width=0.6, color='red')

        # --- Telemetry text block ---
        telemetry = (
            f"Time: {log['time'][i]:.1f} s\n"
            f"Speed: {v_values[i] * 3.6:.1f} km/h\n"
            f"Throttle: {throttle_values[i] * 100:.1f}%\n"
            f"Brake: {brake_values[i] * 100:.1f}%\n"
            f"Steer: {np.rad2deg(steer_values[i]):.1f}°\n"
            f"Camera: {log['camera_mode'][i]}"
        )

        plt.text(
            0.02, 0.98, telemetry,
            transform=plt.gca().transAxes,
            fontsize=10, family='monospace',
            verticalalignment='top',
            bbox=dict(facecolor='white', alpha=0.7, edgecolor='none')
        )

        plt.title("Car Simulation with Telemetry")
        plt.xlabel("x [m]")
        plt.ylabel("y [m]")
        plt.gca().set_aspect("equal", "datalim")
        plt.grid(True)

        plt.pause(0.001)

    plt.show()


def plot_simulation_metrics(log):
    time = np.array(log["time"])
    v = np.array(log["v"])
    throttle = np.array(log["throttle"])
    brake = np.array(log["brake"])
    steer = np.array(log["front_wheel_angle"])
    cam_target = np.array(log["camera_target_yaw"])
    cam_yaw = np.array(log["camera_yaw"])

    fig, axs = plt.subplots(4, 1, figsize=(10, 12), sharex=True)

    # ---- 1. Speed ----
    axs[0].plot(time, v, label="Speed (m/s)", color='b')
    axs[0].set_ylabel("Speed (m/s)")
    axs[0].grid(True)
    axs[0].set_title("Vehicle Speed, Pedals, Steering, and Camera Yaw")

    # ---- 2. Pedals ----
    axs[1].plot(time, throttle, label="Throttle", color='g')
    axs[1].plot(time, brake, label="Brake", color='r')
    axs[1].set_ylabel("Pedal")
    axs[1].set_ylim([-0.05, 1.05])
    axs[1].legend(loc="upper right")
    axs[1].grid(True)

    # ---- 3. Steering ----
    axs[2].plot(time, np.rad2deg(steer), label="Front wheel (deg)", color='orange')
    axs[2].set_ylabel("Steer (deg)")
    axs[2].grid(True)

    # ---- 4. Camera yaw ----
    axs[3].plot(time, cam_target, label="Target yaw", color='purple')
    axs[3].plot(time, cam_yaw, label="Camera yaw", color='gray', alpha=0.6)
    axs[3].set_ylabel("Yaw (rad)")
    axs[3].legend(loc="upper right")
    axs[3].grid(True)

    axs[3].set_xlabel("Time (s)")

    plt.tight_layout()
    plt.show()
