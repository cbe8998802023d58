# HORECA/backend/tests/test_cafe_utils.py : pure cafe rules

from types import SimpleNamespace
from typing import get_args

import pytest
from pydantic import ValidationError

from horeca.constants import CAFE_STATUSES, TOBACCO_BRANDS
from horeca.schemas import schemas
from horeca.services.cafe_utils import (
    get_cafe_size, get_visit_counts, get_contract_counts, can_update_cafe_status,
)

def cafe(hookahs, status="Pending"):
    return SimpleNamespace(number_of_hookahs=hookahs, status=status)

@pytest.mark.parametrize("hookahs,expected", [
    (0, "In Negotiation"),
    (1, "Small"),
    (3, "Small"),
    (4, "Medium"),
    (7, "Medium"),
    (8, "Large"),
    (50, "Large"),
])
def test_get_cafe_size(hookahs, expected):
    assert get_cafe_size(hookahs) == expected

def test_visit_counts_include_contracted_cafes():
    cafes = [
        cafe(2, "Visited"),
        cafe(5, "Contracted"),
        cafe(9, "Visited"),
        cafe(9, "Pending"),
        cafe(0, "Visited"),  # in negotiation, no size bucket
    ]
    assert get_visit_counts(cafes) == {"small": 1, "medium": 1, "large": 1, "total": 3}

def test_contract_counts_only_contracted():
    cafes = [
        cafe(2, "Contracted"),
        cafe(3, "Contracted"),
        cafe(5, "Visited"),
        cafe(10, "Contracted"),
    ]
    assert get_contract_counts(cafes) == {"small": 2, "medium": 0, "large": 1, "total": 3}

def test_counts_on_empty_list():
    assert get_visit_counts([]) == {"small": 0, "medium": 0, "large": 0, "total": 0}

class TestCanUpdateCafeStatus:
    def test_cafe_in_negotiation_cannot_be_contracted(self):
        assert can_update_cafe_status(cafe(0), "Contracted") is False

    def test_cafe_in_negotiation_can_be_visited(self):
        assert can_update_cafe_status(cafe(0), "Visited") is True
        assert can_update_cafe_status(cafe(0), "Pending") is True

    def test_cafe_with_hookahs_can_be_contracted(self):
        assert can_update_cafe_status(cafe(1), "Contracted") is True

def test_schema_choices_follow_constants():
    assert get_args(schemas.TobaccoBrand) == tuple(TOBACCO_BRANDS)
    assert get_args(schemas.CafeStatus) == tuple(CAFE_STATUSES)
    for brand in TOBACCO_BRANDS:
        assert schemas.BrandSaleIn(brand=brand, packs_per_week=1).brand == brand
    with pytest.raises(ValidationError):
        schemas.BrandSaleIn(brand="Marlboro", packs_per_week=1)
