import math
from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation

from config import car_config


@dataclass(frozen=True)
class WheelMount:
    name: str
    position: tuple          # offset in the car body frame [m]
    init_rotation: Rotation  # orientation of the wheel model at rest
    is_steering: bool


# Body frame of the car model: x lateral, y up, z forward.
WHEEL_LAYOUT = (
    WheelMount("front_left", (0.5, -0.25, 1.3), Rotation.from_euler("z", -math.pi / 2), True),
    WheelMount("rear_left", (0.5, -0.25, -1.3), Rotation.from_euler("z", -math.pi / 2), False),
    WheelMount("front_right", (-0.5, -0.25, 1.3), Rotation.from_euler("z", math.pi / 2), True),
    WheelMount("rear_right", (-0.5, -0.25, -1.3), Rotation.from_euler("z", math.pi / 2), False),
)


def wheel_roll_angle(s, cfg=car_config):
    """Roll angle [rad] in [0, 2*pi) for odometer reading s."""
    return float(np.mod(s / cfg["wheel_radius_m"], 2.0 * math.pi))


def wheel_rotations(state, control, cfg=car_config, layout=WHEEL_LAYOUT):
    """
    Local rotation of every wheel for the current tick.

    All wheels roll about x by the odometer angle; steering wheels are then
    turned about y by the front wheel angle.
    """
    roll = Rotation.from_euler("x", wheel_roll_angle(state.s, cfg))
    steer = Rotation.from_euler("y", control.front_wheel_angle)

    rotations = {}
    for mount in layout:
        rot = roll * mount.init_rotation
        if mount.is_steering:
            rot = steer * rot
        rotations[mount.name] = rot
    return rotations


def wheel_quaternions(rotations):
    # scalar-last [x, y, z, w], as consumed by the renderer
    return {name: rot.as_quat() for name, rot in rotations.items()}
