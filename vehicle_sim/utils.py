import math
import numpy as np
import csv,json
from enum import Enum

TWO_PI = 2.0 * math.pi


# =========================================================
# ===================== Angle helpers =====================
# =========================================================

def normalize_angle(angle):
    """
    Reduce an angle [rad] into (-pi, pi].
    """
    a = math.fmod(angle, TWO_PI)
    if a > math.pi:
        a -= TWO_PI
    elif a <= -math.pi:
        a += TWO_PI
    return a


def wrap(x, low, high):
    """
    Map x into [low, high) by whole periods of (high - low).

    Values already inside [low, high] (both ends inclusive) come back untouched.
    Caller guarantees high > low, see check_interval.
    """
    if low <= x <= high:
        return x
    period = high - low
    num_wraps = math.floor((x - low) / period)
    return x - period * num_wraps


def check_interval(low, high):
    if not high > low:
        raise ValueError(f"invalid interval [{low}, {high}]: high must be greater than low")
    return low, high


# =========================================================
# ===================== Log export ========================
# =========================================================

def _to_builtin(value):
    # numpy scalars / enums are not JSON serializable as-is
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, Enum):
        return value.name
    return value


def save_log_to_json(log, out_file="results/log.json"):
    clean = {key: [_to_builtin(v) for v in values] for key, values in log.items()}
    with open(out_file, 'w') as f:
        json.dump(clean, f, indent=4)
    print(f"Data successfully saved to {out_file}")


def export_log_csv(log, out_file="results/telemetry.csv"):
    """
    Save the per-tick telemetry log to CSV, one row per tick.
    """
    columns = list(log.keys())
    n_rows = len(log[columns[0]]) if columns else 0

    with open(out_file, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(columns)
        for i in range(n_rows):
            writer.writerow([_to_builtin(log[col][i]) for col in columns])

    print(f"CSV telemetry saved to {out_file}")
