import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from config import camera_config, car_config
from vehicle_sim.utils import TWO_PI, check_interval, normalize_angle, wrap


class CameraMode(Enum):
    THIRD_PERSON = "third_person"
    FIRST_PERSON = "first_person"
    OVER_SHOULDER = "over_shoulder"


NEXT_MODE = {
    CameraMode.THIRD_PERSON: CameraMode.FIRST_PERSON,
    CameraMode.FIRST_PERSON: CameraMode.OVER_SHOULDER,
    CameraMode.OVER_SHOULDER: CameraMode.THIRD_PERSON,
}

# target yaw of the driver-aligned views is kept in this interval
YAW_INTERVAL = check_interval(-math.pi, math.pi)


@dataclass
class CameraAim:
    """
    Targets handed to the orbit camera. current_yaw is the camera's own yaw
    (owned by the orbit camera), possibly shifted by 2*pi so that it sits
    within pi of target_yaw.
    """
    target_focus: np.ndarray = field(default_factory=lambda: np.zeros(3))
    target_yaw: float = 0.0
    target_pitch: float = 0.0
    target_radius: float = 0.0
    current_yaw: float = 0.0
    force_update: bool = False


def unwrap_yaw(current_yaw, target_yaw):
    """
    Shift current_yaw by whole turns to the representative nearest target_yaw.
    """
    diff = target_yaw - current_yaw
    if abs(diff) <= math.pi:
        return current_yaw
    return current_yaw + TWO_PI * round(diff / TWO_PI)


class CameraFollowController:
    """
    Picks the camera aim for the current view mode.

    The mode only changes through toggle() / set_mode(); update() runs every
    tick and recomputes the focus point and, for the driver-aligned views,
    the target yaw.
    """

    def __init__(self, cfg=camera_config, mode=CameraMode.THIRD_PERSON):
        self.cfg = cfg
        self.mode = mode
        self.aim = CameraAim()
        self._reset_targets()

    def toggle(self):
        self.set_mode(NEXT_MODE[self.mode])
        return self.mode

    def set_mode(self, mode):
        """UI request for a specific mode, same effect as toggling into it."""
        mode = CameraMode(mode)
        if mode == self.mode:
            return False
        self.mode = mode
        self._reset_targets()
        return True

    def _reset_targets(self):
        params = self.cfg[self.mode.value]
        if self.mode == CameraMode.THIRD_PERSON:
            self.aim.target_yaw = params["yaw"]
        self.aim.target_pitch = params["pitch"]
        self.aim.target_radius = params["radius"]
        self.aim.force_update = True

    def focus_point(self, state, car_cfg=car_config):
        focus = np.array([state.x, state.y, car_cfg["car_height_m"]])
        if self.mode != CameraMode.THIRD_PERSON:
            ox, oy = self.cfg["focus_offset"]
            c, s = math.cos(state.yaw), math.sin(state.yaw)
            focus[0] += c * ox - s * oy
            focus[1] += s * ox + c * oy
        return focus

    def update(self, state, current_yaw, current_pitch=0.0, toggle=False,
               orbit_yaw=0.0, orbit_pitch=0.0, dt=0.0):
        """
        Recompute the aim for this tick.

        orbit_yaw / orbit_pitch in [-1, 1] nudge the camera by hand, only
        honoured in third person view.
        """
        if toggle:
            self.toggle()

        aim = self.aim
        aim.target_focus = self.focus_point(state)
        aim.current_yaw = current_yaw

        if self.mode == CameraMode.THIRD_PERSON:
            rate = self.cfg["orbit_rate"] * dt
            if orbit_yaw:
                aim.target_yaw = normalize_angle(current_yaw + np.clip(orbit_yaw, -1.0, 1.0) * rate)
                aim.force_update = True
            if orbit_pitch:
                limit = self.cfg["pitch_limit"]
                pitch = normalize_angle(current_pitch + np.clip(orbit_pitch, -1.0, 1.0) * rate)
                aim.target_pitch = float(np.clip(pitch, -limit, limit))
                aim.force_update = True
            # reset or nudged targets can sit across the +-pi seam from the camera
            aim.current_yaw = unwrap_yaw(current_yaw, aim.target_yaw)
        else:
            # camera sits behind the driver, heading is measured from +x
            aim.target_yaw = wrap(state.yaw - math.pi / 2, *YAW_INTERVAL)
            aim.current_yaw = unwrap_yaw(current_yaw, aim.target_yaw)
            aim.force_update = True

        return aim


@dataclass
class OrbitCamera:
    """
    Minimal stand-in for the orbit camera layer: eases its own yaw, pitch,
    radius and focus towards the controller's targets.
    """
    yaw: float = 0.0
    pitch: float = -math.pi / 4
    radius: float = 50.0
    focus: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def follow(self, aim, smoothness=camera_config["smoothness"]):
        k = 1.0 - smoothness
        self.yaw = aim.current_yaw + (aim.target_yaw - aim.current_yaw) * k
        self.pitch += (aim.target_pitch - self.pitch) * k
        self.radius += (aim.target_radius - self.radius) * k
        self.focus = self.focus + (aim.target_focus - self.focus) * k
        aim.force_update = False
        return self
