import math

car_config = {
    # Geometry
    "wheelbase_m": 3.0,
    "wheel_radius_m": 0.35,
    "car_height_m": 0.64,     # ground to body origin
    "max_steer_deg": 35.0,
    "steer_ratio": 15.0,      # steering wheel angle / front wheel angle

    # Longitudinal limits
    "max_accel": 5.0,         # m/s^2
    "max_speed": 33.3,        # m/s (~120 km/h)
}

brake_config = {
    "curve_midpoint": 0.4,    # pedal value at half braking force
    "response_gain": 7.0,     # steepness of the S-curve
    "v_threshold": 0.2,       # m/s, fade-out speed near standstill
}

steering_config = {
    "omega_min": 2.0,         # rad/s, steering rate floor at high speed
    "omega0": 12.0,           # rad/s, extra rate available at standstill
    "lambda": 0.3,
    "v0": 10.0,               # m/s
}

camera_config = {
    # (forward, left) in the car frame, rotated by yaw; FIRST_PERSON / OVER_SHOULDER aim 3 m ahead
    "focus_offset": (3.0, 0.0),
    "third_person": {"yaw": math.pi / 4, "pitch": math.radians(-60.0), "radius": 50.0},
    "first_person": {"pitch": math.radians(-80.0), "radius": 2.0},
    "over_shoulder": {"pitch": -3.0 * math.pi / 8.0, "radius": 20.0},
    "pitch_limit": math.pi / 2,
    "orbit_rate": math.pi,               # rad/s for manual yaw/pitch nudges
    "smoothness": 0.8,                   # orbit camera stand-in
}

sound_config = {
    "throttle_threshold": 0.5,
    "brake_threshold": 0.5,
    "brake_sound_speed": 5.0,  # m/s
}

# kinematic bicycle model state
state = {
    "x": 0.0,          # world x [m]
    "y": 0.0,          # world y [m]
    "yaw": 0.0,        # heading [rad], (-pi, pi]
    "v": 0.0,          # speed [m/s]
    "s": 0.0,          # odometer [m]
}

control = {
    "throttle": 0.0,           # 0 to 1
    "brake": 0.0,              # 0 to 1
    "front_wheel_angle": 0.0,  # [rad]
    "steer_wheel_angle": 0.0,  # [rad], cosmetic
}
