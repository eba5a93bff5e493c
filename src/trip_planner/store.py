"""JSON store: load and save the whole application state in one file."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from uuid import UUID

from trip_planner.models import (
    Aisle,
    GroceryItem,
    Ingredient,
    Language,
    MealPlanDay,
    MealSlot,
    MealType,
    QuickPack,
    Recipe,
    Settings,
    Store,
    Tag,
    ThemeMode,
    Trip,
    Unit,
)
from trip_planner.seed import seed_store

logger = logging.getLogger(__name__)


def store_path(data_dir: Path, config: dict) -> Path:
    return data_dir / config["store_file"]


def _opt_value(e: Unit | None) -> str | None:
    return e.value if e is not None else None


def _ingredient_to_dict(ing: Ingredient) -> dict:
    return {
        "id": str(ing.id),
        "name": ing.name,
        "quantity": ing.quantity,
        "unit": _opt_value(ing.unit),
        "aisle": ing.aisle.value,
    }


def _recipe_to_dict(r: Recipe) -> dict:
    return {
        "id": str(r.id),
        "title": r.title,
        "tags": [t.value for t in r.tags],
        "time_minutes": r.time_minutes,
        "ingredients": [_ingredient_to_dict(i) for i in r.ingredients],
        "steps": list(r.steps),
        "is_favorite": r.is_favorite,
    }


def _trip_to_dict(t: Trip) -> dict:
    return {
        "id": str(t.id),
        "name": t.name,
        "start_date": t.start_date.isoformat(),
        "end_date": t.end_date.isoformat(),
        "notes": t.notes,
        "days": [
            {
                "id": str(d.id),
                "date": d.date.isoformat(),
                "meals": [
                    {
                        "id": str(s.id),
                        "type": s.type.value,
                        "recipe_ids": [str(rid) for rid in s.recipe_ids],
                    }
                    for s in d.meals
                ],
            }
            for d in t.days
        ],
    }


def _grocery_to_dict(g: GroceryItem) -> dict:
    return {
        "id": str(g.id),
        "name": g.name,
        "aisle": g.aisle.value,
        "quantity": g.quantity,
        "unit": _opt_value(g.unit),
        "is_checked": g.is_checked,
        "recipe_ref": str(g.recipe_ref) if g.recipe_ref else None,
    }


def store_to_dict(store: Store) -> dict:
    return {
        "recipes": [_recipe_to_dict(r) for r in store.recipes],
        "favorites": sorted(str(rid) for rid in store.favorites),
        "quick_packs": [
            {
                "id": str(p.id),
                "title": p.title,
                "recipe_ids": [str(rid) for rid in p.recipe_ids],
            }
            for p in store.quick_packs
        ],
        "trips": [_trip_to_dict(t) for t in store.trips],
        "groceries": [_grocery_to_dict(g) for g in store.groceries],
        "settings": {
            "theme": store.settings.theme.value,
            "language": store.settings.language.value,
            "privacy_url": store.settings.privacy_url,
        },
    }


def _unit(raw: str | None) -> Unit | None:
    return Unit(raw) if raw else None


def _ingredient_from_dict(d: dict) -> Ingredient:
    return Ingredient(
        id=UUID(d["id"]),
        name=d["name"],
        quantity=d.get("quantity"),
        unit=_unit(d.get("unit")),
        aisle=Aisle(d.get("aisle", "other")),
    )


def _recipe_from_dict(d: dict) -> Recipe:
    return Recipe(
        id=UUID(d["id"]),
        title=d["title"],
        tags=[Tag(t) for t in d.get("tags", [])],
        time_minutes=d.get("time_minutes"),
        ingredients=[_ingredient_from_dict(i) for i in d.get("ingredients", [])],
        steps=list(d.get("steps", [])),
        is_favorite=d.get("is_favorite", False),
    )


def _trip_from_dict(d: dict) -> Trip:
    days = [
        MealPlanDay(
            id=UUID(day["id"]),
            date=date.fromisoformat(day["date"]),
            meals=[
                MealSlot(
                    id=UUID(s["id"]),
                    type=MealType(s["type"]),
                    recipe_ids=[UUID(rid) for rid in s.get("recipe_ids", [])],
                )
                for s in day.get("meals", [])
            ],
        )
        for day in d.get("days", [])
    ]
    return Trip(
        id=UUID(d["id"]),
        name=d["name"],
        start_date=date.fromisoformat(d["start_date"]),
        end_date=date.fromisoformat(d["end_date"]),
        notes=d.get("notes"),
        days=days,
    )


def _grocery_from_dict(d: dict) -> GroceryItem:
    ref = d.get("recipe_ref")
    return GroceryItem(
        id=UUID(d["id"]),
        name=d["name"],
        aisle=Aisle(d.get("aisle", "other")),
        quantity=d.get("quantity"),
        unit=_unit(d.get("unit")),
        is_checked=d.get("is_checked", False),
        recipe_ref=UUID(ref) if ref else None,
    )


def store_from_dict(data: dict) -> Store:
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    settings = data.get("settings") or {}
    return Store(
        recipes=[_recipe_from_dict(r) for r in data.get("recipes", [])],
        favorites={UUID(rid) for rid in data.get("favorites", [])},
        quick_packs=[
            QuickPack(
                id=UUID(p["id"]),
                title=p["title"],
                recipe_ids=[UUID(rid) for rid in p.get("recipe_ids", [])],
            )
            for p in data.get("quick_packs", [])
        ],
        trips=[_trip_from_dict(t) for t in data.get("trips", [])],
        groceries=[_grocery_from_dict(g) for g in data.get("groceries", [])],
        settings=Settings(
            theme=ThemeMode(settings.get("theme", "system")),
            language=Language(settings.get("language", "en")),
            privacy_url=settings.get("privacy_url"),
        ),
    )


def load_store(path: Path) -> Store:
    """Load the store from path, falling back to seed content.

    A missing file or one that cannot be decoded yields the seed store.
    """
    if not path.exists():
        logger.info("No store at %s, starting from seed content", path)
        return seed_store()

    try:
        with open(path, encoding="utf-8") as f:
            return store_from_dict(json.load(f))
    except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Could not decode store %s (%s), starting from seed content", path, e)
        return seed_store()


def save_store(path: Path, store: Store) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(store_to_dict(store), f, indent=2, ensure_ascii=False)
    logger.debug("Saved store to %s", path)
