import math
import numpy as np
from dataclasses import dataclass, field, replace

from config import car_config, control as initial_control, state as initial_state
from vehicle_sim.camera import CameraFollowController, CameraMode, OrbitCamera
from vehicle_sim.control_curves import longitudinal_acceleration
from vehicle_sim.load_inputs import sample_inputs, tick_times
from vehicle_sim.sound import SoundStateTracker
from vehicle_sim.steering import get_steering_angle
from vehicle_sim.utils import normalize_angle
from vehicle_sim.wheels import wheel_rotations


@dataclass(frozen=True)
class VehicleStateDerivative:
    dx: float = 0.0
    dy: float = 0.0
    dtheta: float = 0.0
    dv: float = 0.0
    ds: float = 0.0

    def __mul__(self, dt):
        return VehicleStateDerivative(
            dx=self.dx * dt,
            dy=self.dy * dt,
            dtheta=self.dtheta * dt,
            dv=self.dv * dt,
            ds=self.ds * dt,
        )

    __rmul__ = __mul__


@dataclass(frozen=True)
class VehicleState:
    x: float = 0.0     # world x [m]
    y: float = 0.0     # world y [m]
    yaw: float = 0.0   # heading [rad], (-pi, pi]
    v: float = 0.0     # speed [m/s]
    s: float = 0.0     # odometer [m]

    def __add__(self, dq):
        if not isinstance(dq, VehicleStateDerivative):
            return NotImplemented
        return VehicleState(
            x=self.x + dq.dx,
            y=self.y + dq.dy,
            yaw=normalize_angle(self.yaw + dq.dtheta),
            v=self.v + dq.dv,
            s=self.s + dq.ds,
        )

    def apply_derivative(self, dq, dt):
        return self + dq * dt


@dataclass
class ControlInput:
    throttle: float = 0.0           # [0, 1]
    brake: float = 0.0              # [0, 1]
    front_wheel_angle: float = 0.0  # [rad], within +-max_steer
    steer_wheel_angle: float = 0.0  # [rad], front_wheel_angle * steer_ratio


@dataclass
class Vehicle:
    state: VehicleState = field(default_factory=VehicleState)
    control: ControlInput = field(default_factory=ControlInput)


def compute_derivative(state, control, cfg=car_config):
    """
    Kinematic bicycle model rates for the current state and controls.
    """
    L = cfg["wheelbase_m"]
    return VehicleStateDerivative(
        dx=state.v * math.cos(state.yaw),
        dy=state.v * math.sin(state.yaw),
        dtheta=state.v * math.tan(control.front_wheel_angle) / L,
        dv=longitudinal_acceleration(control.throttle, control.brake, state.v, cfg),
        ds=state.v,
    )


def simulate_vehicle_step(state, control, cfg, dt):
    """
    One explicit Euler step of the bicycle model.
    Returns (next_state, derivative). dt <= 0 leaves the state as is.
    """
    dt = max(0.0, float(dt))
    dq = compute_derivative(state, control, cfg)
    return state.apply_derivative(dq, dt), dq


def respawn(vehicle):
    vehicle.state = VehicleState(**initial_state)
    vehicle.control = ControlInput(**initial_control)
    return vehicle


def apply_driver_input(vehicle, driver_input, dt, cfg=car_config):
    """
    Pedals are taken as-is (clamped), the steering command goes through the
    rate-limited steering controller.
    """
    control = vehicle.control
    control.throttle = float(np.clip(driver_input.throttle, 0.0, 1.0))
    control.brake = float(np.clip(driver_input.brake, 0.0, 1.0))
    control.front_wheel_angle, control.steer_wheel_angle = get_steering_angle(
        vehicle.state.v,
        control.front_wheel_angle,
        driver_input.steer,
        dt,
        cfg,
    )
    return control


@dataclass
class SimSession:
    vehicle: Vehicle = field(default_factory=Vehicle)
    camera: CameraFollowController = field(default_factory=CameraFollowController)
    orbit: OrbitCamera = field(default_factory=OrbitCamera)
    sound: SoundStateTracker = field(default_factory=SoundStateTracker)
    t: float = 0.0


@dataclass
class TickResult:
    state: VehicleState
    control: ControlInput
    derivative: VehicleStateDerivative
    wheels: dict
    camera_mode: CameraMode
    camera_aim: object
    sound_event: object = None


def simulation_tick(session, driver_input, dt, cfg=car_config):
    """
    Advance the session by one frame:
    input -> response curves -> integrator -> wheels / camera -> sound.
    """
    dt = max(0.0, float(dt))
    vehicle = session.vehicle

    if driver_input.respawn:
        respawn(vehicle)

    # 1. controls
    apply_driver_input(vehicle, driver_input, dt, cfg)

    # 2. integrate
    vehicle.state, dq = simulate_vehicle_step(vehicle.state, vehicle.control, cfg, dt)

    # 3. visuals
    wheels = wheel_rotations(vehicle.state, vehicle.control, cfg)

    aim = session.camera.update(
        vehicle.state,
        current_yaw=session.orbit.yaw,
        current_pitch=session.orbit.pitch,
        toggle=driver_input.camera_toggle,
        orbit_yaw=driver_input.camera_yaw,
        orbit_pitch=driver_input.camera_pitch,
        dt=dt,
    )
    aim_snapshot = replace(aim, target_focus=aim.target_focus.copy())
    session.orbit.follow(aim)

    # 4. audio
    sound_event = session.sound.update(vehicle.control, vehicle.state)

    session.t += dt

    return TickResult(
        state=vehicle.state,
        control=replace(vehicle.control),
        derivative=dq,
        wheels=wheels,
        camera_mode=session.camera.mode,
        camera_aim=aim_snapshot,
        sound_event=sound_event,
    )


def get_dashboard_readout(vehicle, camera_mode):
    """
    Read-only snapshot for the instrument panel.
    """
    state = vehicle.state
    control = vehicle.control
    return {
        "position": (state.x, state.y),
        "speed_mps": state.v,
        "speed_kmh": state.v * 3.6,
        "heading_deg": math.degrees(state.yaw),
        "trip_m": state.s,
        "trip_km": state.s / 1000.0,
        "throttle": control.throttle,
        "brake": control.brake,
        "steer_angle_deg": math.degrees(control.front_wheel_angle),
        "steer_wheel_deg": math.degrees(control.steer_wheel_angle),
        "camera_mode": camera_mode.name,
    }


def run_simulation(trace, cfg=car_config, dt=1.0 / 60.0, debug_step=60, session=None):
    """
    Replay a driver input trace through the tick chain.
    Returns the telemetry log and the session.
    """

    # ------------------------------------
    # INITIAL STATE
    # ------------------------------------
    if session is None:
        session = SimSession()

    # ------------------------------------
    # LOGGING
    # ------------------------------------
    log = {
        "time": [], "x": [], "y": [], "yaw": [], "v": [], "s": [],
        "throttle": [], "brake": [],
        "front_wheel_angle": [], "steer_wheel_angle": [],
        "camera_mode": [], "camera_target_yaw": [], "camera_yaw": [],
        "sound_state": [],
    }
    sound_events = 0

    # ------------------------------------
    # SIMULATION LOOP
    # ------------------------------------
    for i, (t_prev, t) in enumerate(tick_times(trace.duration_s, dt)):
        driver_input = sample_inputs(trace, t, dt, t_prev)

        result = simulation_tick(session, driver_input, dt, cfg)
        state = result.state
        control = result.control

        if result.sound_event is not None:
            sound_events += 1

        log["time"].append(t)
        log["x"].append(state.x)
        log["y"].append(state.y)
        log["yaw"].append(state.yaw)
        log["v"].append(state.v)
        log["s"].append(state.s)
        log["throttle"].append(control.throttle)
        log["brake"].append(control.brake)
        log["front_wheel_angle"].append(control.front_wheel_angle)
        log["steer_wheel_angle"].append(control.steer_wheel_angle)
        log["camera_mode"].append(result.camera_mode.name)
        log["camera_target_yaw"].append(result.camera_aim.target_yaw)
        log["camera_yaw"].append(session.orbit.yaw)
        log["sound_state"].append(session.sound.state.name)

        if debug_step and i % debug_step == 0:
            print(
                f"[t={t:.2f}s] "
                f"v={state.v:.2f}m/s, "
                f"yaw={math.degrees(state.yaw):.1f}deg, "
                f"throttle={control.throttle:.2f}, "
                f"brake={control.brake:.2f}, "
                f"steer={math.degrees(control.front_wheel_angle):.1f}deg, "
                f"s={state.s:.1f}, camera={result.camera_mode.name}"
            )

    # ------------------------------------
    # SUMMARY OUTPUT
    # ------------------------------------
    state = session.vehicle.state
    print("=== Simulation Complete ===")
    print(f"Time elapsed: {session.t:.1f} sec")
    print(f"Distance traveled: {state.s:.1f} m")
    print(f"Final speed: {state.v:.2f} m/s ({state.v * 3.6:.1f} km/h)")
    print(f"Final position: ({state.x:.1f}, {state.y:.1f}), heading {math.degrees(state.yaw):.1f} deg")
    print(f"Sound transitions: {sound_events}")

    return log, session
