from datetime import date

import pytest
from trip_planner.models import (
    Aisle,
    Ingredient,
    MealPlanDay,
    MealSlot,
    MealType,
    Recipe,
    Tag,
    Trip,
    Unit,
)


def _make_trip(*days: list[tuple[MealType, list]], name: str = "Test Trip") -> Trip:
    """Build a trip from per-day lists of (meal_type, recipe_ids)."""
    start = date(2026, 5, 1)
    plan_days = [
        MealPlanDay(
            date=date(2026, 5, 1 + i),
            meals=[MealSlot(type=meal, recipe_ids=list(ids)) for meal, ids in slots],
        )
        for i, slots in enumerate(days)
    ]
    end = plan_days[-1].date if plan_days else start
    return Trip(name=name, start_date=start, end_date=end, days=plan_days)


@pytest.fixture
def sample_recipes() -> list[Recipe]:
    """Small catalog of fake recipes for unit tests."""
    return [
        Recipe(title="Overnight Oats", tags=[Tag.NO_FRIDGE, Tag.FIVE_MIN], time_minutes=5,
               ingredients=[
                   Ingredient("Oats", 60, Unit.G, Aisle.DRY_GOODS),
                   Ingredient("Milk", 200, Unit.ML, Aisle.DAIRY),
                   Ingredient("Honey", 1, Unit.TBSP, Aisle.CONDIMENTS),
               ]),
        Recipe(title="Milky Tea", tags=[Tag.HOTEL],
               ingredients=[
                   Ingredient("milk", 100, Unit.ML, Aisle.OTHER),
                   Ingredient("Tea bags", 2, Unit.PIECE, Aisle.BEVERAGES),
               ]),
        Recipe(title="Tuna Box", tags=[Tag.ROAD, Tag.HIGH_PROTEIN],
               ingredients=[
                   Ingredient("Canned tuna", 1, Unit.PIECE, Aisle.CANNED),
                   Ingredient("Oil", 1, Unit.TBSP, Aisle.CONDIMENTS),
                   Ingredient("Salt", aisle=Aisle.CONDIMENTS),
               ]),
        Recipe(title="Jar Salad", tags=[Tag.VEGETARIAN, Tag.NO_FRIDGE],
               ingredients=[
                   Ingredient("Zucchini", 1, Unit.PIECE, Aisle.PRODUCE),
                   Ingredient("Oil", None, None, Aisle.OTHER),
               ]),
        Recipe(title="Apple Snack", tags=[Tag.SNACK, Tag.KIDS],
               ingredients=[
                   Ingredient("Apple", 2, Unit.PIECE, Aisle.PRODUCE),
               ]),
    ]


@pytest.fixture
def lookup(sample_recipes):
    return {r.id: r for r in sample_recipes}


@pytest.fixture
def make_trip():
    return _make_trip
