"""
Category / tracking taxonomy.

Static vocabularies shared by the usage flow and the form validation layer:
- which content units and container types each item category accepts
  (first entry is the default)
- which tracking types keep per-container content
"""

from types import MappingProxyType
from typing import Optional, Tuple

CHEMICAL = "chemical"
CONSUMABLE = "consumable"
ITEM_CATEGORIES = (CHEMICAL, CONSUMABLE)

SIMPLE_MEASURE = "SIMPLE_MEASURE"
UNIT_ONLY = "UNIT_ONLY"
PACK_WITH_CONTENT = "PACK_WITH_CONTENT"
TRACKING_TYPES = (SIMPLE_MEASURE, UNIT_ONLY, PACK_WITH_CONTENT)

CHEMICAL_UNITS = ("mg", "g", "kg", "uL", "µL", "mL", "L")
CONSUMABLE_UNITS = ("pcs", "pieces", "tubes", "vials", "strips", "sachets", "preps")

CHEMICAL_CONTAINER_TYPES = ("bottle", "jar", "vial", "tube", "bag", "can", "box", "drum", "ampoule")
CONSUMABLE_CONTAINER_TYPES = ("pack", "box", "pcs", "set", "bundle", "carton", "kit", "sleeve")

FALLBACK_CONTENT_UNIT = "pcs"
FALLBACK_CONTAINER_TYPE = "pack"

CATEGORY_CONTENT_UNITS = MappingProxyType({
    CHEMICAL: CHEMICAL_UNITS,
    CONSUMABLE: CONSUMABLE_UNITS,
})

CATEGORY_CONTAINER_TYPES = MappingProxyType({
    CHEMICAL: CHEMICAL_CONTAINER_TYPES,
    CONSUMABLE: CONSUMABLE_CONTAINER_TYPES,
})


def content_units_for(category: Optional[str]) -> Tuple[str, ...]:
    return CATEGORY_CONTENT_UNITS.get(category, ())


def container_types_for(category: Optional[str]) -> Tuple[str, ...]:
    return CATEGORY_CONTAINER_TYPES.get(category, ())


def default_content_unit(category: Optional[str]) -> str:
    units = content_units_for(category)
    return units[0] if units else FALLBACK_CONTENT_UNIT


def default_container_type(category: Optional[str]) -> str:
    types = container_types_for(category)
    return types[0] if types else FALLBACK_CONTAINER_TYPE


def is_valid_content_unit(category: Optional[str], unit: Optional[str]) -> bool:
    """Case-sensitive match after trimming; blank input is never valid."""
    normalized = str(unit or "").strip()
    if not normalized:
        return False
    return normalized in content_units_for(category)


def uses_containers(tracking_type: Optional[str]) -> bool:
    # UNIT_ONLY items only keep a unit count, no per-container content.
    return tracking_type in (SIMPLE_MEASURE, PACK_WITH_CONTENT)
