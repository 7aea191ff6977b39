"""
Thermal calculator module.

Closed-form physics for a lumped water mass in a thin-walled cylinder:
mixing, the cooling constant, and Newton's law of cooling.

Units: temperatures in degC, time in minutes, volumes in ml.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional
import numpy as np

from .config import (
    WATER_DENSITY,
    WATER_SPECIFIC_HEAT,
    REFERENCE_VELOCITY,
    lateral_surface_area,
)
from .materials import BottleMaterial
from .methods import CoolingMethod


class InvalidInputError(ValueError):
    """Raised when inputs make a calculation undefined."""
    pass


class WaterSplit(NamedTuple):
    hot: int  # ml
    cold: int  # ml


class TimeOutcome(Enum):
    REACHED = "reached"
    DURATION = "duration"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class TimeEstimate:
    """Time-to-target with the 0 / infinity sentinels made explicit."""
    outcome: TimeOutcome
    minutes: Optional[float] = None

    @property
    def is_reachable(self) -> bool:
        return self.outcome is not TimeOutcome.UNREACHABLE


def newton_cooling(initial_temp: float,
                   elapsed: float,
                   ambient: float,
                   k: float) -> float:
    """
    Temperature after cooling for a given time.

    T(t) = T_amb + (T0 - T_amb) * exp(-k * t)

    Args:
        initial_temp: [arg] Initial temperature (degC).
        elapsed: [arg] Elapsed time (min).
        ambient: [arg] Ambient temperature (degC).
        k: [arg] Cooling constant (1/min).

    Returns:
        Temperature in degC.
    """
    if elapsed == 0 or k == 0:
        return initial_temp
    return ambient + (initial_temp - ambient) * np.exp(-k * elapsed)


def heat_transfer_coefficient(method: CoolingMethod) -> float:
    """
    Heat transfer coefficient corrected for flow velocity.

    h = base_h * sqrt(v / v_ref + 1)

    Returns:
        h in W/(m^2 K).
    """
    return method.base_h * np.sqrt(method.velocity / REFERENCE_VELOCITY + 1.0)


def cooling_constant(volume_ml: float,
                     material: BottleMaterial,
                     method: CoolingMethod) -> float:
    """
    Cooling constant of the bottle.

    k = (h * A * f_material) / (m * c)

    Args:
        volume_ml: [arg] Formula volume (ml).
        material: [arg] Bottle material. Its conductivity factor scales k.
        method: [arg] Cooling method.

    Returns:
        k in 1/min.
    """
    # V / 1000 is litres against a per-m^3 density, so this is 1000x the kg value
    mass = (volume_ml / 1000.0) * WATER_DENSITY
    area = lateral_surface_area(volume_ml)  # m^2
    h = heat_transfer_coefficient(method)

    k_per_second = (h * area * material.thermal_conductivity) / (mass * WATER_SPECIFIC_HEAT)
    return k_per_second * 60.0


def time_to_target(initial_temp: float,
                   target_temp: float,
                   ambient: float,
                   k: float) -> float:
    """
    Minutes until the target temperature is reached.

    t = -ln((T_target - T_amb) / (T0 - T_amb)) / k

    Returns:
        0 if already at or below the target, infinity if the target is at or
        below ambient and can never be reached.
    """
    if initial_temp <= target_temp:
        return 0.0

    if target_temp <= ambient:
        return np.inf

    ratio = (target_temp - ambient) / (initial_temp - ambient)
    if ratio <= 0:
        return np.inf

    return -np.log(ratio) / k


def estimate_time_to_target(initial_temp: float,
                            target_temp: float,
                            ambient: float,
                            k: float) -> TimeEstimate:
    """Same as time_to_target, tagged so callers cannot do math on infinity."""
    minutes = time_to_target(initial_temp, target_temp, ambient, k)
    if np.isinf(minutes):
        return TimeEstimate(TimeOutcome.UNREACHABLE)
    if minutes == 0:
        return TimeEstimate(TimeOutcome.REACHED, 0.0)
    return TimeEstimate(TimeOutcome.DURATION, float(minutes))


def mixed_temperature(hot_temp: float,
                      hot_volume: float,
                      cold_temp: float,
                      cold_volume: float) -> float:
    """
    Temperature after mixing hot and cold water.

    T_mix = (T_hot * V_hot + T_cold * V_cold) / (V_hot + V_cold)
    """
    if cold_volume == 0:
        return hot_temp
    if hot_volume == 0:
        return cold_temp
    total_volume = hot_volume + cold_volume
    return (hot_temp * hot_volume + cold_temp * cold_volume) / total_volume


def water_volumes(total_volume: float,
                  hot_temp: float,
                  cold_temp: float,
                  target_mix_temp: float) -> WaterSplit:
    """
    Split a total volume into hot and cold water to hit a mix temperature.

    From conservation of heat and volume:
        hot * (T_hot - T_mix) = cold * (T_mix - T_cold)
        hot + cold = total
    so hot = total * (T_mix - T_cold) / (T_hot - T_cold).

    Both parts are whole ml: hot water is rounded and cold water takes the
    remainder of the rounded total. Mixing the returned split is only within
    about 1 degC of the target.

    Raises:
        InvalidInputError: If hot and cold water have the same temperature.
    """
    if hot_temp == cold_temp:
        raise InvalidInputError(
            f"Hot and cold water are both {hot_temp} degC, no mix can reach {target_mix_temp} degC")

    hot = total_volume * (target_mix_temp - cold_temp) / (hot_temp - cold_temp)
    # Half-up rounding
    hot = int(np.floor(hot + 0.5))
    cold = int(np.floor(total_volume + 0.5)) - hot
    return WaterSplit(hot=hot, cold=cold)


def cooling_rate(current_temp: float, ambient: float, k: float) -> float:
    """
    Instantaneous cooling rate, dT/dt = -k * (T - T_amb).

    Returns:
        Rate in degC/min, negative while above ambient.
    """
    return -k * (current_temp - ambient)
