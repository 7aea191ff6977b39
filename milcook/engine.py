"""
Thermal engine.

Combines the calculator with the material and cooling method catalogs into a
single preparation plan, plus the projections used while a bottle cools.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional
import numpy as np

from .config import HOT_WATER_TEMP, DEFAULT_TARGET_MIX_TEMP
from .calculator import (
    newton_cooling,
    cooling_constant,
    time_to_target,
    mixed_temperature,
    water_volumes,
    cooling_rate,
)
from .materials import BottleMaterial, get_material
from .methods import CoolingMethod, get_cooling_method, get_all_cooling_methods

logger = logging.getLogger(__name__)


@dataclass
class ThermalCalculationParams:
    """Inputs for planning one preparation."""
    volume: float
    """Formula volume in ml."""

    material_id: str

    cooling_method_id: str

    target_temp: float
    """Feeding temperature in degC."""

    cold_water_temp: float
    """Temperature of the available cold water in degC."""

    target_mix_temp: float = DEFAULT_TARGET_MIX_TEMP
    """Temperature right after mixing in degC."""


@dataclass(frozen=True)
class ThermalCalculationResult:
    """A preparation plan. hot_water_volume + cold_water_volume == volume rounded to whole ml."""
    hot_water_volume: int  # ml
    cold_water_volume: int  # ml
    initial_mix_temp: float  # degC

    cooling_constant: float  # 1/min
    predicted_cooling_time: float  # min, inf if unreachable
    ambient_temp: float  # degC

    material: BottleMaterial
    method: CoolingMethod

    @property
    def total_volume(self) -> int:
        return self.hot_water_volume + self.cold_water_volume


@dataclass(frozen=True)
class MethodComparison:
    method: CoolingMethod
    cooling_time: float  # min, inf if unreachable
    cooling_time_seconds: Optional[int]  # None if unreachable


def plan_preparation(params: ThermalCalculationParams) -> ThermalCalculationResult:
    """
    Plan a formula preparation.

    1. Split the volume into hot and cold water.
    2. Compute the temperature after mixing.
    3. Predict the cooling time to the feeding temperature.

    Raises:
        UnknownMaterialError: If params.material_id is not in the catalog.
        UnknownCoolingMethodError: If params.cooling_method_id is not in the catalog.
    """
    material = get_material(params.material_id)
    method = get_cooling_method(params.cooling_method_id)

    hot_water, cold_water = water_volumes(
        params.volume,
        HOT_WATER_TEMP,
        params.cold_water_temp,
        params.target_mix_temp,
    )

    initial_mix_temp = mixed_temperature(
        HOT_WATER_TEMP,
        hot_water,
        params.cold_water_temp,
        cold_water,
    )

    k = cooling_constant(params.volume, material, method)

    predicted_cooling_time = time_to_target(
        initial_mix_temp,
        params.target_temp,
        method.ambient_temp,
        k,
    )

    logger.debug("Planned %s ml (%s, %s): %s ml hot + %s ml cold, %.1f degC, k=%.4f/min, %.2f min",
                 params.volume, material.id, method.id, hot_water, cold_water,
                 initial_mix_temp, k, predicted_cooling_time)

    return ThermalCalculationResult(
        hot_water_volume=hot_water,
        cold_water_volume=cold_water,
        initial_mix_temp=initial_mix_temp,
        cooling_constant=k,
        predicted_cooling_time=predicted_cooling_time,
        ambient_temp=method.ambient_temp,
        material=material,
        method=method,
    )


def project_current_temperature(initial_temp: float,
                                elapsed_minutes: float,
                                ambient_temp: float,
                                k: float) -> float:
    """Temperature after elapsed_minutes of cooling."""
    return newton_cooling(initial_temp, elapsed_minutes, ambient_temp, k)


def project_remaining_time(current_temp: float,
                           target_temp: float,
                           ambient_temp: float,
                           k: float) -> float:
    """
    Minutes left from the current temperature.

    Recomputed from the current rather than the initial temperature, so the
    countdown follows the projected temperature as elapsed time is fed in.
    """
    return time_to_target(current_temp, target_temp, ambient_temp, k)


def project_cooling_rate(current_temp: float,
                         ambient_temp: float,
                         k: float) -> float:
    return cooling_rate(current_temp, ambient_temp, k)


def compare_cooling_methods(volume: float,
                            material: BottleMaterial,
                            initial_temp: float,
                            target_temp: float) -> List[MethodComparison]:
    """
    Predicted cooling time for every catalog method under the same conditions.

    Results are in catalog priority order, not sorted by time.
    """
    comparisons = []
    for method in get_all_cooling_methods():
        k = cooling_constant(volume, material, method)
        minutes = time_to_target(initial_temp, target_temp, method.ambient_temp, k)
        seconds = None if np.isinf(minutes) else int(round(minutes * 60.0))
        comparisons.append(MethodComparison(method=method,
                                            cooling_time=minutes,
                                            cooling_time_seconds=seconds))
    return comparisons
