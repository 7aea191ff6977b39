"""
Script to plan the default preparation and generate a cooling dashboard.
Includes: temperature curves per cooling method, and the live countdown for the chosen method.
"""

import logging
import matplotlib.pyplot as plt
import numpy as np
import sys
import os

# Ensure project root is in path
sys.path.append(os.getcwd())

from milcook.config import UserSettings
from milcook.engine import plan_preparation, compare_cooling_methods, project_current_temperature
from milcook.calculator import cooling_constant
from milcook.simulation import CoolingTracker, CoolingSimulation


def plot_cooling_report(settings: UserSettings, simulation: CoolingSimulation) -> None:
    params = settings.to_params()
    result = plan_preparation(params)
    results = simulation.results

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 10))

    # --- Panel 1: Temperature curve per method ---
    comparisons = compare_cooling_methods(params.volume, result.material,
                                          result.initial_mix_temp, params.target_temp)
    finite = [c.cooling_time for c in comparisons if np.isfinite(c.cooling_time)]
    t_max = max(finite) * 1.2 if finite else 60.0
    minutes = np.linspace(0.0, t_max, 300)

    for comparison in comparisons:
        method = comparison.method
        k = cooling_constant(params.volume, result.material, method)
        temps = [project_current_temperature(result.initial_mix_temp, t, method.ambient_temp, k)
                 for t in minutes]
        ax1.plot(minutes, temps, linewidth=1.5,
                 label=f"{method.name} ({comparison.cooling_time:.1f} min)")

    ax1.axhline(params.target_temp, color='black', linestyle='--', linewidth=1, label='Target')
    ax1.set_xlabel('Time (min)')
    ax1.set_ylabel('Temperature (°C)')
    ax1.set_title(f'Cooling {params.volume:.0f} ml in {result.material.name} '
                  f'({result.hot_water_volume} ml hot + {result.cold_water_volume:.0f} ml cold)')
    ax1.legend(loc='upper right')
    ax1.grid(True, alpha=0.3)

    # --- Panel 2: Countdown for the chosen method ---
    time_min = np.array(results.time) / 60.0
    ax2.plot(time_min, results.temperature, label='Temperature (°C)', color='red', linewidth=2)
    ax2.set_ylabel('Temperature (°C)', color='red')
    ax2.tick_params(axis='y', labelcolor='red')
    ax2.grid(True)

    ax2_r = ax2.twinx()
    ax2_r.plot(time_min, results.remaining, label='Remaining (min)', color='blue', linewidth=1.5)
    ax2_r.set_ylabel('Remaining (min)', color='blue')
    ax2_r.tick_params(axis='y', labelcolor='blue')

    ax2.set_xlabel('Time (min)')
    ax2.set_title(f'Countdown: {result.method.name}')

    lines, labels = ax2.get_legend_handles_labels()
    lines2, labels2 = ax2_r.get_legend_handles_labels()
    ax2.legend(lines + lines2, labels + labels2, loc='upper right')

    plt.tight_layout()
    plt.savefig('cooling_report.png')
    print("Report saved to 'cooling_report.png'")


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    settings = UserSettings()
    params = settings.to_params()
    result = plan_preparation(params)

    print(f"Mix {result.hot_water_volume} ml at 85°C with {result.cold_water_volume:.0f} ml "
          f"at {params.cold_water_temp:.0f}°C -> {result.initial_mix_temp:.1f}°C")
    print(f"Predicted cooling time ({result.method.name}): {result.predicted_cooling_time:.2f} min")

    tracker = CoolingTracker.from_result(result, params.target_temp)
    # Tick once a simulated minute
    simulation = CoolingSimulation(tracker, dt=60.0)
    if np.isfinite(result.predicted_cooling_time):
        simulation.run(result.predicted_cooling_time * 60.0 + 600.0)
    else:
        simulation.run(24 * 3600.0)

    if simulation.results.outcome:
        print(f"Simulation ended: {simulation.results.outcome} at t={simulation.t / 60:.2f} min")
    else:
        print("Simulation reached max duration.")

    plot_cooling_report(settings, simulation)


if __name__ == "__main__":
    main()
