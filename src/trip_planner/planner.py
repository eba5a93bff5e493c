"""Trip creation and meal slot editing."""

from __future__ import annotations

import logging
import sys
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import TypeVar
from uuid import UUID

from trip_planner.config import load_config
from trip_planner.models import (
    MEAL_LABELS,
    MealPlanDay,
    MealSlot,
    MealType,
    QuickPack,
    Recipe,
    Store,
    Trip,
)
from trip_planner.store import load_store, save_store, store_path

logger = logging.getLogger(__name__)


def new_trip(name: str, start: date, end: date) -> Trip:
    """Create a trip with one day per date in [start, end], each with empty meal slots."""
    name = name.strip()
    if not name:
        raise ValueError("Trip name cannot be empty")
    if end < start:
        raise ValueError(f"Trip end date {end} is before start date {start}")

    days = []
    current = start
    while current <= end:
        days.append(MealPlanDay(date=current, meals=[MealSlot(type=m) for m in MealType]))
        current += timedelta(days=1)

    return Trip(name=name, start_date=start, end_date=end, days=days)


def _append_to_slot(day: MealPlanDay, meal_type: MealType, recipe_id: UUID) -> None:
    for slot in day.meals:
        if slot.type == meal_type:
            slot.recipe_ids.append(recipe_id)
            return
    day.meals.append(MealSlot(type=meal_type, recipe_ids=[recipe_id]))


def add_recipe_to_slot(trip: Trip, day_index: int, meal_type: MealType, recipe_id: UUID) -> bool:
    """Append recipe_id to the first slot of meal_type on the given day.

    The slot is created when the day has none of that type. Returns False and
    leaves the trip alone when day_index is out of range.
    """
    if not 0 <= day_index < len(trip.days):
        return False
    _append_to_slot(trip.days[day_index], meal_type, recipe_id)
    return True


def remove_recipe_from_slot(trip: Trip, day_index: int, meal_type: MealType, recipe_id: UUID) -> int:
    """Remove every occurrence of recipe_id from the first slot of meal_type on a day.

    Returns the number of ids removed, 0 when the day or the slot is missing.
    """
    if not 0 <= day_index < len(trip.days):
        return 0
    slots = trip.days[day_index].slots_for(meal_type)
    if not slots:
        return 0
    slot = slots[0]
    before = len(slot.recipe_ids)
    slot.recipe_ids = [rid for rid in slot.recipe_ids if rid != recipe_id]
    return before - len(slot.recipe_ids)


def delete_trip(store: Store, trip: Trip) -> None:
    """Drop a trip from the store. The grocery list is left alone."""
    store.trips = [t for t in store.trips if t.id != trip.id]


def _first_day(store: Store, default_trip_name: str, today: date | None) -> MealPlanDay:
    """Day 0 of the first trip, creating the trip or the day when missing."""
    today = today or date.today()
    if not store.trips:
        store.trips.append(Trip(
            name=default_trip_name,
            start_date=today,
            end_date=today,
            days=[MealPlanDay(date=today, meals=[MealSlot(type=m) for m in MealType])],
        ))

    trip = store.trips[0]
    if not trip.days:
        trip.days.append(MealPlanDay(date=today))
    return trip.days[0]


def add_recipe_to_plan(
    store: Store,
    recipe_id: UUID,
    meal_type: MealType = MealType.LUNCH,
    default_trip_name: str = "Weekend Road Trip",
    today: date | None = None,
) -> Trip:
    """Put a single recipe on the first day of the first trip."""
    day = _first_day(store, default_trip_name, today)
    _append_to_slot(day, meal_type, recipe_id)
    return store.trips[0]


def add_pack_to_plan(
    store: Store,
    pack: QuickPack,
    meal_order: list[MealType] | None = None,
    default_trip_name: str = "Weekend Road Trip",
    today: date | None = None,
) -> Trip:
    """Spread a quick pack's recipes over the first day of the first trip.

    Recipes are assigned to meals in meal_order, wrapping around when the
    pack holds more recipes than there are meals.
    """
    order = meal_order or list(MealType)
    day = _first_day(store, default_trip_name, today)
    for idx, rid in enumerate(pack.recipe_ids):
        _append_to_slot(day, order[idx % len(order)], rid)
    return store.trips[0]


def pack_trip(pack: QuickPack, day: date | None = None) -> Trip:
    """A throwaway single-day trip holding every recipe of a quick pack."""
    day = day or date.today()
    return Trip(
        name=pack.title,
        start_date=day,
        end_date=day,
        days=[MealPlanDay(date=day, meals=[
            MealSlot(type=MealType.LUNCH, recipe_ids=list(pack.recipe_ids)),
        ])],
    )


T = TypeVar("T", Trip, Recipe, QuickPack)


def _find_by_name(items: list[T], query: str, names: list[str], kind: str) -> T:
    """Exact case-insensitive match first, then the shortest substring match."""
    query_lower = query.strip().lower()

    for item, name in zip(items, names):
        if name.lower() == query_lower:
            return item

    matches = [(item, name) for item, name in zip(items, names) if query_lower in name.lower()]
    if matches:
        matches.sort(key=lambda x: len(x[1]))
        return matches[0][0]

    raise ValueError(f"No {kind} found matching '{query}'")


def find_trip(trips: list[Trip], query: str) -> Trip:
    return _find_by_name(trips, query, [t.name for t in trips], "trip")


def find_recipe(recipes: list[Recipe], query: str) -> Recipe:
    return _find_by_name(recipes, query, [r.title for r in recipes], "recipe")


def find_pack(packs: list[QuickPack], query: str) -> QuickPack:
    return _find_by_name(packs, query, [p.title for p in packs], "quick pack")


def format_trip(trip: Trip, recipe_lookup: dict[UUID, Recipe]) -> str:
    """Format a trip's plan as markdown, one section per day."""
    lines = [f"# {trip.name} ({trip.start_date} to {trip.end_date})", ""]
    for day in trip.days:
        lines.append(f"## {day.date.strftime('%A %Y-%m-%d')}")
        lines.append("")
        for slot in day.meals:
            titles = [
                recipe_lookup[rid].title if rid in recipe_lookup else "(missing recipe)"
                for rid in slot.recipe_ids
            ]
            lines.append(f"- **{MEAL_LABELS[slot.type]}:** {', '.join(titles) or '-'}")
        lines.append("")
    return "\n".join(lines)


def run_trips(data_dir: Path, trip_name: str | None = None) -> None:
    """CLI entry point for trips command."""
    config = load_config(data_dir)
    store = load_store(store_path(data_dir, config))

    if trip_name:
        try:
            trip = find_trip(store.trips, trip_name)
        except ValueError as e:
            print(str(e), file=sys.stderr)
            sys.exit(1)
        print(format_trip(trip, store.recipe_lookup()))
        return

    if not store.trips:
        logger.warning("No trips planned")
        return

    for trip in store.trips:
        planned = len(trip.recipe_ids())
        print(f"{trip.name}: {trip.start_date} to {trip.end_date}, "
              f"{len(trip.days)} days, {planned} planned recipes")


def run_new_trip(data_dir: Path, name: str, start_date: str, end_date: str | None = None) -> None:
    """CLI entry point for new-trip command."""
    config = load_config(data_dir)
    path = store_path(data_dir, config)
    store = load_store(path)

    try:
        start = datetime.strptime(start_date, "%Y-%m-%d").date()
        end = datetime.strptime(end_date, "%Y-%m-%d").date() if end_date else start + timedelta(days=1)
        trip = new_trip(name, start, end)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    store.trips.append(trip)
    save_store(path, store)
    logger.info("Created trip '%s' with %d days", trip.name, len(trip.days))


def run_plan_add(
    data_dir: Path,
    recipe_name: str,
    trip_name: str | None = None,
    day: int = 1,
    meal: str | None = None,
) -> None:
    """CLI entry point for plan-add command.

    Without a trip name the recipe goes to the first day of the first trip,
    like adding a favorite from the recipe list.
    """
    config = load_config(data_dir)
    planner_cfg = config["planner"]
    path = store_path(data_dir, config)
    store = load_store(path)
    meal_type = MealType(meal or planner_cfg["favorite_meal"])

    try:
        recipe = find_recipe(store.recipes, recipe_name)
        if trip_name:
            trip = find_trip(store.trips, trip_name)
            if not add_recipe_to_slot(trip, day - 1, meal_type, recipe.id):
                raise ValueError(f"Trip '{trip.name}' has no day {day}")
        else:
            trip = add_recipe_to_plan(
                store, recipe.id, meal_type,
                default_trip_name=planner_cfg["default_trip_name"],
            )
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    save_store(path, store)
    logger.info("Added '%s' to %s on '%s'", recipe.title, meal_type.value, trip.name)


def run_pack_to_plan(data_dir: Path, pack_name: str) -> None:
    """CLI entry point for pack --plan."""
    config = load_config(data_dir)
    planner_cfg = config["planner"]
    path = store_path(data_dir, config)
    store = load_store(path)

    try:
        pack = find_pack(store.quick_packs, pack_name)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    trip = add_pack_to_plan(
        store,
        pack,
        meal_order=[MealType(m) for m in planner_cfg["pack_meal_order"]],
        default_trip_name=planner_cfg["default_trip_name"],
    )
    save_store(path, store)
    logger.info("Added pack '%s' to '%s'", pack.title, trip.name)


def run_plan_remove(
    data_dir: Path,
    recipe_name: str,
    trip_name: str,
    day: int = 1,
    meal: str | None = None,
) -> None:
    """CLI entry point for plan-remove command."""
    config = load_config(data_dir)
    path = store_path(data_dir, config)
    store = load_store(path)
    meal_type = MealType(meal or config["planner"]["favorite_meal"])

    try:
        recipe = find_recipe(store.recipes, recipe_name)
        trip = find_trip(store.trips, trip_name)
        if not 1 <= day <= len(trip.days):
            raise ValueError(f"Trip '{trip.name}' has no day {day}")
        removed = remove_recipe_from_slot(trip, day - 1, meal_type, recipe.id)
        if not removed:
            raise ValueError(f"'{recipe.title}' is not planned for {meal_type.value} on day {day}")
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    save_store(path, store)
    logger.info("Removed '%s' from %s on '%s' day %d", recipe.title, meal_type.value, trip.name, day)


def run_delete_trip(data_dir: Path, trip_name: str) -> None:
    """CLI entry point for delete-trip command."""
    config = load_config(data_dir)
    path = store_path(data_dir, config)
    store = load_store(path)

    try:
        trip = find_trip(store.trips, trip_name)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    delete_trip(store, trip)
    save_store(path, store)
    logger.info("Deleted trip '%s'", trip.name)
