"""
milcook Configuration Module.

This module contains the physical constants, the bottle geometry approximation
and the user-tunable defaults for a formula preparation.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict
import numpy as np

# --- Water ---
WATER_DENSITY = 1000.0
"""[C] Water density in kg/m^3."""

WATER_SPECIFIC_HEAT = 4186.0
"""[C] Water specific heat in J/(kg K)."""

# --- Heat transfer reference values ---
NATURAL_CONVECTION_H = 10.0
"""[C] Natural convection coefficient in W/(m^2 K)."""

FORCED_CONVECTION_H = 50.0
"""[C] Forced convection coefficient in W/(m^2 K)."""

REFERENCE_VELOCITY = 0.1
"""[C] Reference flow velocity for the h correction in m/s."""

# --- Mixing ---
HOT_WATER_TEMP = 85.0
"""[C] Temperature of the hot water source in degC."""

DEFAULT_TARGET_MIX_TEMP = 70.0
"""[C] Post-mix temperature needed to prepare formula safely in degC."""

# --- Bottle (right circular cylinder approximation) ---
BOTTLE_RADIUS = 0.035
"""[C] Bottle radius in m (7 cm diameter)."""


def bottle_height(volume_ml: float) -> float:
    """
    Height of the liquid column for a given volume.

    V = pi * r^2 * h  =>  h = V / (pi * r^2)

    Args:
        volume_ml: [arg] Volume in ml. Not validated, non-positive volumes
            give a non-physical height.

    Returns:
        Height in m.
    """
    volume_m3 = volume_ml / 1_000_000.0
    return volume_m3 / (np.pi * BOTTLE_RADIUS ** 2)


def lateral_surface_area(volume_ml: float) -> float:
    """
    Side surface area of the liquid column, 2 * pi * r * h.
    Top and bottom caps are not counted.
    """
    return 2.0 * np.pi * BOTTLE_RADIUS * bottle_height(volume_ml)


@dataclass
class UserSettings:
    """
    Holds the caregiver's defaults for a new preparation.
    """

    # --- Preparation defaults ---
    default_volume: float = 140.0
    """Formula volume in ml."""

    default_material_id: str = "glass"

    default_cooling_method_id: str = "ice_still"

    default_target_temp: float = 38.0
    """Feeding temperature in degC."""

    default_cold_water_temp: float = 20.0
    """Temperature of the cooled boiled water in degC."""

    default_target_mix_temp: float = DEFAULT_TARGET_MIX_TEMP

    # --- UI ---
    night_mode: bool = False
    sound_enabled: bool = True
    vibration_enabled: bool = True

    # --- Alerts ---
    alert_before_minutes: float = 1.0
    """Minutes before the predicted finish to alert."""

    alert_enabled: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_params(self, **overrides: Any):
        """
        Build engine parameters from these defaults.

        Args:
            overrides: [arg] ThermalCalculationParams fields to use instead of
                the defaults, e.g. volume=200.
        """
        # Local import, engine depends on this module
        from .engine import ThermalCalculationParams

        values = {
            "volume": self.default_volume,
            "material_id": self.default_material_id,
            "cooling_method_id": self.default_cooling_method_id,
            "target_temp": self.default_target_temp,
            "cold_water_temp": self.default_cold_water_temp,
            "target_mix_temp": self.default_target_mix_temp,
        }
        values.update(overrides)
        return ThermalCalculationParams(**values)
