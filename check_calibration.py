"""
Script to check the cooling method calibration.
Prints predicted cooling times over volumes, materials and methods,
and the deviation of the closed form from a numerical integration.
"""
import numpy as np
import sys
import os

# Ensure project root in path
sys.path.append(os.getcwd())

from milcook.config import HOT_WATER_TEMP, UserSettings
from milcook.calculator import cooling_constant, water_volumes, mixed_temperature
from milcook.engine import compare_cooling_methods, project_current_temperature
from milcook.materials import get_all_materials
from milcook.methods import get_all_cooling_methods
from milcook.simulation import solve_cooling_ode


def analyze_calibration():
    settings = UserSettings()
    volumes = [60, 100, 140, 200, 240]

    print(f"Target {settings.default_target_temp:.0f}°C, mix {settings.default_target_mix_temp:.0f}°C, "
          f"cold water {settings.default_cold_water_temp:.0f}°C")
    print("-" * 80)
    print(f"{'Volume':<8} | {'Material':<9} | " + " | ".join(f"{m.id:<11}" for m in get_all_cooling_methods()))
    print("-" * 80)

    for volume in volumes:
        split = water_volumes(volume, HOT_WATER_TEMP, settings.default_cold_water_temp,
                              settings.default_target_mix_temp)
        t0 = mixed_temperature(HOT_WATER_TEMP, split.hot, settings.default_cold_water_temp, split.cold)

        for material in get_all_materials():
            comparisons = compare_cooling_methods(volume, material, t0, settings.default_target_temp)
            cells = " | ".join(f"{c.cooling_time:>7.2f} min" for c in comparisons)
            print(f"{volume:<8} | {material.id:<9} | {cells}")

    print("\n--- Closed form vs numerical integration (max abs deviation) ---")
    material = get_all_materials()[0]
    for method in get_all_cooling_methods():
        k = cooling_constant(settings.default_volume, material, method)
        sol = solve_cooling_ode(settings.default_target_mix_temp, method.ambient_temp, k, t_span=(0.0, 60.0))
        closed = np.array([project_current_temperature(settings.default_target_mix_temp, t,
                                                       method.ambient_temp, k) for t in sol.t])
        deviation = np.max(np.abs(closed - sol.y[0]))
        print(f"{method.id:<12} k={k:.4f}/min  deviation={deviation:.2e}°C")


if __name__ == "__main__":
    analyze_calibration()
