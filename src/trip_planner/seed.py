"""Seed content for a fresh store."""

from __future__ import annotations

from datetime import date, timedelta

from trip_planner.models import (
    Aisle,
    GroceryItem,
    Ingredient,
    MealPlanDay,
    MealSlot,
    MealType,
    QuickPack,
    Recipe,
    Store,
    Tag,
    Trip,
    Unit,
)


def _ing(name: str, qty: float | None = None, unit: Unit | None = None,
         aisle: Aisle = Aisle.OTHER) -> Ingredient:
    return Ingredient(name=name, quantity=qty, unit=unit, aisle=aisle)


def seed_recipes() -> list[Recipe]:
    return [
        Recipe(
            title="Overnight Oats To-Go",
            tags=[Tag.NO_FRIDGE, Tag.FIVE_MIN, Tag.HOTEL],
            time_minutes=5,
            ingredients=[
                _ing("Oats", 60, Unit.G, Aisle.DRY_GOODS),
                _ing("Milk", 200, Unit.ML, Aisle.DAIRY),
                _ing("Chia seeds", 1, Unit.TBSP, Aisle.DRY_GOODS),
                _ing("Honey", 1, Unit.TBSP, Aisle.CONDIMENTS),
            ],
            steps=["Mix ingredients", "Leave overnight in fridge", "Grab & go"],
        ),
        Recipe(
            title="Tortilla Wraps Kit",
            tags=[Tag.ROAD, Tag.KIDS, Tag.FIVE_MIN],
            ingredients=[
                _ing("Tortillas", 4, Unit.PIECE, Aisle.BAKERY),
                _ing("Cheese", 100, Unit.G, Aisle.DAIRY),
                _ing("Turkey slices", 150, Unit.G, Aisle.DELI),
                _ing("Lettuce", aisle=Aisle.PRODUCE),
                _ing("Sauce pack", aisle=Aisle.CONDIMENTS),
            ],
            steps=["Assemble ingredients", "Wrap", "Pack"],
        ),
        Recipe(
            title="Couscous Jar Salad",
            tags=[Tag.HOTEL, Tag.NO_FRIDGE, Tag.VEGETARIAN],
            ingredients=[
                _ing("Couscous", 80, Unit.G, Aisle.DRY_GOODS),
                _ing("Boiling water", 120, Unit.ML, Aisle.OTHER),
                _ing("Chickpeas", 150, Unit.G, Aisle.CANNED),
                _ing("Tomato", 1, Unit.PIECE, Aisle.PRODUCE),
                _ing("Cucumber", 1, Unit.PIECE, Aisle.PRODUCE),
                _ing("Olive oil", 1, Unit.TBSP, Aisle.CONDIMENTS),
            ],
            steps=["Hydrate couscous", "Chop vegetables", "Mix all"],
        ),
        Recipe(
            title="Protein Trail Mix",
            tags=[Tag.FLIGHT, Tag.SNACK, Tag.HIGH_PROTEIN, Tag.NO_FRIDGE],
            ingredients=[
                _ing("Almonds", 50, Unit.G, Aisle.SNACKS),
                _ing("Peanuts", 50, Unit.G, Aisle.SNACKS),
                _ing("Raisins", 40, Unit.G, Aisle.SNACKS),
                _ing("Dark chocolate", 30, Unit.G, Aisle.SNACKS),
            ],
            steps=["Portion into bags", "Pack"],
        ),
        Recipe(
            title="Tuna & Bean Travel Box",
            tags=[Tag.ROAD, Tag.HIGH_PROTEIN],
            ingredients=[
                _ing("Canned tuna", 1, Unit.PIECE, Aisle.CANNED),
                _ing("Canned beans", 1, Unit.PIECE, Aisle.CANNED),
                _ing("Olive oil", 1, Unit.TBSP, Aisle.CONDIMENTS),
                _ing("Lemon", 1, Unit.PIECE, Aisle.PRODUCE),
                _ing("Salt/Pepper", aisle=Aisle.CONDIMENTS),
            ],
            steps=["Drain cans", "Mix with oil & lemon", "Pack"],
        ),
        Recipe(
            title="Hummus & Veggie Sticks Kit",
            tags=[Tag.VEGETARIAN, Tag.NO_FRIDGE, Tag.SNACK],
            ingredients=[
                _ing("Hummus cups", 2, Unit.PIECE, Aisle.CANNED),
                _ing("Carrots", 2, Unit.PIECE, Aisle.PRODUCE),
                _ing("Cucumber", 1, Unit.PIECE, Aisle.PRODUCE),
                _ing("Pita bread", 1, Unit.PIECE, Aisle.BAKERY),
            ],
            steps=["Cut vegetables", "Portion hummus", "Pack"],
        ),
    ]


def seed_store(today: date | None = None) -> Store:
    """Example recipes, quick packs, a two-day trip and its grocery list."""
    from trip_planner.groceries import aggregate

    today = today or date.today()
    tomorrow = today + timedelta(days=1)

    recipes = seed_recipes()
    oats, wraps, couscous, trail_mix, tuna_box, hummus = recipes
    oats.is_favorite = True
    couscous.is_favorite = True

    quick_packs = [
        QuickPack(title="Light 1-Day", recipe_ids=[oats.id, couscous.id, trail_mix.id]),
        QuickPack(title="Family Road 2-Meals", recipe_ids=[wraps.id, hummus.id]),
    ]

    trip = Trip(
        name="Weekend Road Trip",
        start_date=today,
        end_date=tomorrow,
        days=[
            MealPlanDay(date=today, meals=[
                MealSlot(type=MealType.BREAKFAST, recipe_ids=[oats.id]),
                MealSlot(type=MealType.LUNCH, recipe_ids=[wraps.id]),
                MealSlot(type=MealType.SNACK, recipe_ids=[trail_mix.id]),
                MealSlot(type=MealType.DINNER, recipe_ids=[tuna_box.id]),
            ]),
            MealPlanDay(date=tomorrow, meals=[
                MealSlot(type=MealType.BREAKFAST, recipe_ids=[oats.id]),
                MealSlot(type=MealType.LUNCH, recipe_ids=[couscous.id]),
                MealSlot(type=MealType.SNACK, recipe_ids=[hummus.id]),
                MealSlot(type=MealType.DINNER, recipe_ids=[wraps.id]),
            ]),
        ],
    )

    store = Store(
        recipes=recipes,
        favorites={oats.id, couscous.id},
        quick_packs=quick_packs,
        trips=[trip],
    )
    store.groceries = aggregate(trip, store.recipe_lookup())
    return store
