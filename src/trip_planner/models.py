"""Shared data models for the trip planner."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from uuid import UUID, uuid4


class Unit(Enum):
    PIECE = "piece"
    G = "g"
    KG = "kg"
    ML = "ml"
    L = "l"
    TBSP = "tbsp"
    TSP = "tsp"
    CUP = "cup"


class Aisle(Enum):
    PRODUCE = "produce"
    BAKERY = "bakery"
    DAIRY = "dairy"
    CANNED = "canned"
    DRY_GOODS = "dryGoods"
    CONDIMENTS = "condiments"
    SNACKS = "snacks"
    BEVERAGES = "beverages"
    DELI = "deli"
    OTHER = "other"


class MealType(Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class Tag(Enum):
    ROAD = "road"
    FLIGHT = "flight"
    HOTEL = "hotel"
    NO_FRIDGE = "no-fridge"
    KIDS = "kids"
    FIVE_MIN = "5-min"
    VEGETARIAN = "vegetarian"
    HIGH_PROTEIN = "high-protein"
    SNACK = "snack"


class ThemeMode(Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"


class Language(Enum):
    EN = "en"
    ES = "es"
    FR = "fr"


AISLE_LABELS: dict[Aisle, str] = {
    Aisle.PRODUCE: "Produce",
    Aisle.BAKERY: "Bakery",
    Aisle.DAIRY: "Dairy",
    Aisle.CANNED: "Canned",
    Aisle.DRY_GOODS: "Dry Goods",
    Aisle.CONDIMENTS: "Condiments",
    Aisle.SNACKS: "Snacks",
    Aisle.BEVERAGES: "Beverages",
    Aisle.DELI: "Deli",
    Aisle.OTHER: "Other",
}

UNIT_LABELS: dict[Unit, str] = {
    Unit.PIECE: "pc",
    Unit.G: "g",
    Unit.KG: "kg",
    Unit.ML: "ml",
    Unit.L: "l",
    Unit.TBSP: "Tbsp",
    Unit.TSP: "tsp",
    Unit.CUP: "cup",
}

MEAL_LABELS: dict[MealType, str] = {
    MealType.BREAKFAST: "Breakfast",
    MealType.LUNCH: "Lunch",
    MealType.DINNER: "Dinner",
    MealType.SNACK: "Snack",
}

TAG_LABELS: dict[Tag, str] = {
    Tag.ROAD: "Road trip",
    Tag.FLIGHT: "Flight",
    Tag.HOTEL: "Hotel room",
    Tag.NO_FRIDGE: "No fridge",
    Tag.KIDS: "Kids",
    Tag.FIVE_MIN: "5 minutes",
    Tag.VEGETARIAN: "Vegetarian",
    Tag.HIGH_PROTEIN: "High protein",
    Tag.SNACK: "Snack",
}


@dataclass
class Ingredient:
    name: str
    quantity: float | None = None
    unit: Unit | None = None
    aisle: Aisle = Aisle.OTHER
    id: UUID = field(default_factory=uuid4)


@dataclass
class Recipe:
    title: str
    ingredients: list[Ingredient] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    time_minutes: int | None = None  # prep time
    steps: list[str] = field(default_factory=list)
    is_favorite: bool = False
    id: UUID = field(default_factory=uuid4)


@dataclass
class MealSlot:
    type: MealType
    recipe_ids: list[UUID] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)


@dataclass
class MealPlanDay:
    date: date
    meals: list[MealSlot] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)

    def slots_for(self, meal_type: MealType) -> list[MealSlot]:
        return [s for s in self.meals if s.type == meal_type]


@dataclass
class Trip:
    name: str
    start_date: date
    end_date: date
    days: list[MealPlanDay] = field(default_factory=list)
    notes: str | None = None
    id: UUID = field(default_factory=uuid4)

    def recipe_ids(self) -> list[UUID]:
        """All planned recipe ids in day, slot, position order."""
        return [rid for day in self.days for slot in day.meals for rid in slot.recipe_ids]


@dataclass
class GroceryItem:
    name: str
    aisle: Aisle = Aisle.OTHER
    quantity: float | None = None
    unit: Unit | None = None
    is_checked: bool = False
    recipe_ref: UUID | None = None  # optional back-reference
    id: UUID = field(default_factory=uuid4)


@dataclass
class QuickPack:
    title: str
    recipe_ids: list[UUID] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)


@dataclass
class Settings:
    theme: ThemeMode = ThemeMode.SYSTEM
    language: Language = Language.EN
    privacy_url: str | None = None


@dataclass
class Store:
    recipes: list[Recipe] = field(default_factory=list)
    favorites: set[UUID] = field(default_factory=set)
    quick_packs: list[QuickPack] = field(default_factory=list)
    trips: list[Trip] = field(default_factory=list)
    groceries: list[GroceryItem] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)

    def recipe_lookup(self) -> dict[UUID, Recipe]:
        return {r.id: r for r in self.recipes}
