from enum import Enum

from config import sound_config


class SoundState(Enum):
    NORMAL = "normal"
    THROTTLE = "throttle"
    BRAKE = "brake"


def get_sound_state(control, state, cfg=sound_config):
    if control.throttle > cfg["throttle_threshold"]:
        return SoundState.THROTTLE
    if control.brake > cfg["brake_threshold"] and state.v > cfg["brake_sound_speed"]:
        return SoundState.BRAKE
    return SoundState.NORMAL


class SoundStateTracker:
    """
    Remembers the last sound state so the audio side only hears about
    transitions.
    """

    def __init__(self, cfg=sound_config):
        self.cfg = cfg
        self.state = SoundState.NORMAL

    def update(self, control, vehicle_state):
        """Return the newly entered state, or None if nothing changed."""
        new_state = get_sound_state(control, vehicle_state, self.cfg)
        if new_state == self.state:
            return None
        self.state = new_state
        return new_state
