"""
Cooling method catalog.

Ambient temperature, flow velocity and base heat transfer coefficient for each
way of cooling a bottle. The coefficients are calibrated against measured
cooldowns and are data, not part of the model.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List


class UnknownCoolingMethodError(LookupError):
    """Raised when a cooling method id is not in the catalog."""
    pass


@dataclass(frozen=True)
class CoolingMethod:
    id: str
    name: str
    description: str
    ambient_temp: float  # degC
    velocity: float  # m/s
    base_h: float  # W/(m^2 K)
    velocity_factor: float
    recommended_priority: int  # 1 = most recommended


COOLING_METHODS = MappingProxyType({
    "ice_stir": CoolingMethod(
        id="ice_stir",
        name="Ice water, stirred",
        description="Fast, saves water, practical",
        ambient_temp=2.0,
        velocity=0.3,  # stirring
        base_h=260.0,  # calibrated at 1.65x ice_still
        velocity_factor=1.5,
        recommended_priority=2,
    ),
    "ice_still": CoolingMethod(
        id="ice_still",
        name="Ice water, still",
        description="Leave it and walk away",
        ambient_temp=2.0,
        velocity=0.0,
        base_h=158.0,  # calibrated from a measured 55 -> 38 degC cooldown
        velocity_factor=1.0,
        recommended_priority=1,
    ),
    "water_still": CoolingMethod(
        id="water_still",
        name="Tap water, still",
        description="Cool without ice",
        ambient_temp=15.0,
        velocity=0.0,
        base_h=145.0,
        velocity_factor=1.0,
        recommended_priority=3,
    ),
    "air": CoolingMethod(
        id="air",
        name="Room air",
        description="Too slow (not recommended)",
        ambient_temp=20.0,
        velocity=0.0,
        base_h=17.0,  # calibrated from a measured 62 -> 38 degC cooldown in room air
        velocity_factor=1.0,
        recommended_priority=4,
    ),
})

RECOMMENDED_METHOD_ID = "ice_still"


def get_cooling_method(method_id: str) -> CoolingMethod:
    """
    Look up a cooling method by id.

    Raises:
        UnknownCoolingMethodError: If the id is not registered.
    """
    method = COOLING_METHODS.get(method_id)
    if method is None:
        raise UnknownCoolingMethodError(f"Unknown cooling method ID: {method_id}")
    return method


def get_all_cooling_methods() -> List[CoolingMethod]:
    """All methods, most recommended first. Ties keep catalog order."""
    return sorted(COOLING_METHODS.values(), key=lambda m: m.recommended_priority)


def get_recommended_method() -> CoolingMethod:
    return COOLING_METHODS[RECOMMENDED_METHOD_ID]
