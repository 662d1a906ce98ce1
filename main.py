import pathlib
import sys

from vehicle_sim.load_inputs import *
from vehicle_sim.simulate_car import *
from config import car_config
from vehicle_sim.utils import *

trace_path = sys.argv[1] if len(sys.argv) > 1 else "sample_drive.csv"

try:
    trace = load_input_trace_from_csv(trace_path)
except (FileNotFoundError, ValueError) as exc:
    print(f"ERROR: {exc}")
    raise SystemExit(1)

print(f"Loaded {trace_path}: {len(trace.time_s)} samples, {trace.duration_s:.1f} s")

log, session = run_simulation(trace, car_config, dt=1.0 / 60.0, debug_step=120)

pathlib.Path("results").mkdir(exist_ok=True)
save_log_to_json(log, "results/log.json")
export_log_csv(log, "results/telemetry.csv")

plot_trajectory(log)
plot_simulation_metrics(log)
animate_car_with_telemetry(log, car_config)
