# HORECA/backend/horeca/services/cafe_utils.py : pure rules on cafes

from typing import Dict, Iterable
from horeca.constants import (
    SIZE_IN_NEGOTIATION, SIZE_SMALL, SIZE_MEDIUM, SIZE_LARGE,
    STATUS_VISITED, STATUS_CONTRACTED,
)

def get_cafe_size(number_of_hookahs: int) -> str:
    """Size bucket of a cafe from its hookah count"""
    if number_of_hookahs == 0:
        return SIZE_IN_NEGOTIATION
    if 1 <= number_of_hookahs <= 3:
        return SIZE_SMALL
    if 4 <= number_of_hookahs <= 7:
        return SIZE_MEDIUM
    return SIZE_LARGE

def _count_by_size(cafes) -> Dict[str, int]:
    sizes = [get_cafe_size(cafe.number_of_hookahs) for cafe in cafes]
    small = sizes.count(SIZE_SMALL)
    medium = sizes.count(SIZE_MEDIUM)
    large = sizes.count(SIZE_LARGE)
    return {"small": small, "medium": medium, "large": large, "total": small + medium + large}

def get_visit_counts(cafes: Iterable) -> Dict[str, int]:
    """Visited cafes per size. A contracted cafe has been visited too."""
    visited = [c for c in cafes if c.status in (STATUS_VISITED, STATUS_CONTRACTED)]
    return _count_by_size(visited)

def get_contract_counts(cafes: Iterable) -> Dict[str, int]:
    """Contracted cafes per size"""
    contracted = [c for c in cafes if c.status == STATUS_CONTRACTED]
    return _count_by_size(contracted)

def can_update_cafe_status(cafe, new_status: str) -> bool:
    """A cafe still in negotiation (0 hookahs) cannot be marked as contracted"""
    if cafe.number_of_hookahs == 0 and new_status == STATUS_CONTRACTED:
        return False
    return True
