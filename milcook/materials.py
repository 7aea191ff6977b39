"""
Bottle material catalog.

Each material carries a thermal conductivity correction factor relative to
glass. Wall thickness, density and specific heat are kept for reference; the
lumped model only uses the correction factor.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List


class UnknownMaterialError(LookupError):
    """Raised when a material id is not in the catalog."""
    pass


@dataclass(frozen=True)
class BottleMaterial:
    id: str
    name: str
    thermal_conductivity: float  # correction factor, glass = 1.0
    thickness: float  # m
    density: float  # kg/m^3
    specific_heat: float  # J/(kg K)


# Material effect on a thin-walled bottle is small, roughly 5-10%
MATERIALS = MappingProxyType({
    "glass": BottleMaterial(
        id="glass",
        name="Glass",
        thermal_conductivity=1.0,
        thickness=0.002,
        density=2500.0,
        specific_heat=840.0,
    ),
    "plastic": BottleMaterial(
        id="plastic",
        name="Plastic",
        thermal_conductivity=0.95,  # thicker wall, better insulator
        thickness=0.003,
        density=1200.0,
        specific_heat=1200.0,
    ),
    "ppsu": BottleMaterial(
        id="ppsu",
        name="PPSU",
        thermal_conductivity=0.93,
        thickness=0.003,
        density=1290.0,
        specific_heat=1100.0,
    ),
})


def get_material(material_id: str) -> BottleMaterial:
    """
    Look up a material by id.

    Raises:
        UnknownMaterialError: If the id is not registered.
    """
    material = MATERIALS.get(material_id)
    if material is None:
        raise UnknownMaterialError(f"Unknown material ID: {material_id}")
    return material


def get_all_materials() -> List[BottleMaterial]:
    return list(MATERIALS.values())
