import numpy as np
from config import car_config, brake_config


def calculate_acceleration(throttle, v, cfg=car_config):
    """
    Drive acceleration [m/s^2], linear in throttle and fading out towards max speed.
    Goes negative above max speed.
    """
    return cfg["max_accel"] * throttle * (1.0 - v / cfg["max_speed"])


def calculate_deceleration(brake, v, cfg=car_config, brake_cfg=brake_config):
    """
    Brake acceleration [m/s^2] (<= 0 while moving forward).

    S-shaped pedal response saturating at -max_accel. Below v_threshold the
    force is scaled down with speed so the car settles at standstill instead
    of reversing.
    """
    if brake == 0.0:
        return 0.0

    a_target = -cfg["max_accel"] / (
        1.0 + np.exp(-brake_cfg["response_gain"] * (brake - brake_cfg["curve_midpoint"]))
    )

    v_threshold = brake_cfg["v_threshold"]
    if v > v_threshold:
        return float(a_target)
    return float(a_target * (v / v_threshold))


def longitudinal_acceleration(throttle, brake, v, cfg=car_config, brake_cfg=brake_config):
    # throttle and brake may be pressed together, the effects simply add up
    return calculate_acceleration(throttle, v, cfg) + calculate_deceleration(brake, v, cfg, brake_cfg)
