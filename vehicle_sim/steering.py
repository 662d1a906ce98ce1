import numpy as np
from config import car_config, steering_config


def get_steering_rate(v, steer_cfg=steering_config):
    """
    Max steering wheel rate [rad/s] at speed v.
    Agile near standstill, settling to omega_min once well past v0.
    """
    # large v overflows exp to inf, which just leaves omega_min
    with np.errstate(over="ignore"):
        decay = np.exp(steer_cfg["lambda"] * (v - steer_cfg["v0"]))
    return float(steer_cfg["omega0"] / (1.0 + decay) + steer_cfg["omega_min"])


def get_steering_angle(v, front_wheel_angle, command, dt,
                       cfg=car_config, steer_cfg=steering_config):
    """
    Rate-limited steering update.

    command in [-1, 1], positive turns left. Returns
    (front_wheel_angle, steer_wheel_angle) in radians.
    """
    ratio = cfg["steer_ratio"]
    max_steer = np.deg2rad(cfg["max_steer_deg"])
    command = np.clip(command, -1.0, 1.0)

    steer_rate = get_steering_rate(v, steer_cfg)
    new_delta = float(np.clip(front_wheel_angle + steer_rate / ratio * command * dt,
                              -max_steer, max_steer))
    return new_delta, new_delta * ratio
