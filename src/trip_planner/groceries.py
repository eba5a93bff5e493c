"""Grocery list generation from a trip's meal plan."""

from __future__ import annotations

import dataclasses
import json
import logging
import sys
from collections.abc import Iterable, Mapping
from datetime import date
from pathlib import Path
from uuid import UUID

from trip_planner.config import apply_cli_overrides, load_config
from trip_planner.models import (
    AISLE_LABELS,
    UNIT_LABELS,
    Aisle,
    GroceryItem,
    Ingredient,
    QuickPack,
    Recipe,
    Trip,
    Unit,
)
from trip_planner.planner import find_pack, find_trip, pack_trip
from trip_planner.store import load_store, save_store, store_path

logger = logging.getLogger(__name__)


def grocery_key(name: str) -> str:
    """Merge key for a grocery line: trimmed, lowercased name."""
    return name.strip().lower()


def _new_item(ing: Ingredient) -> GroceryItem:
    return GroceryItem(
        name=ing.name,
        aisle=ing.aisle,
        quantity=ing.quantity,
        unit=ing.unit,
    )


def accumulate(
    acc: dict[str, GroceryItem],
    trip: Trip,
    recipe_lookup: Mapping[UUID, Recipe],
) -> dict[str, GroceryItem]:
    """Fold every ingredient reachable from the trip into the accumulator.

    Recipes are visited day by day, slot by slot, in the order they were
    planned. Ids missing from recipe_lookup are skipped. An ingredient whose
    key is already present only adds to the quantity when both sides carry a
    quantity and the units are equal (two missing units count as equal);
    otherwise the accumulated line is left as is.

    The accumulator is updated in place and returned.
    """
    for day in trip.days:
        for slot in day.meals:
            for rid in slot.recipe_ids:
                recipe = recipe_lookup.get(rid)
                if recipe is None:
                    logger.debug("Skipping unknown recipe id %s in %s", rid, trip.name)
                    continue

                for ing in recipe.ingredients:
                    key = grocery_key(ing.name)
                    existing = acc.get(key)
                    if existing is None:
                        acc[key] = _new_item(ing)
                        continue

                    if (
                        existing.quantity is not None
                        and ing.quantity is not None
                        and existing.unit == ing.unit
                    ):
                        existing.quantity = existing.quantity + ing.quantity
                    else:
                        logger.debug(
                            "Not summing '%s': %s %s vs %s %s",
                            existing.name,
                            existing.quantity,
                            existing.unit.value if existing.unit else None,
                            ing.quantity,
                            ing.unit.value if ing.unit else None,
                        )
    return acc


def _sorted_by_name(items: Iterable[GroceryItem]) -> list[GroceryItem]:
    # Ordinal (codepoint) comparison; stable for equal names
    return sorted(items, key=lambda item: item.name)


def aggregate(trip: Trip, recipe_lookup: Mapping[UUID, Recipe]) -> list[GroceryItem]:
    """Build a fresh, deduplicated grocery list for a trip.

    The result is meant to replace the current grocery list wholesale. Every
    line is newly created, unchecked and without a recipe back-reference.
    """
    acc = accumulate({}, trip, recipe_lookup)
    return _sorted_by_name(acc.values())


def merge_into_existing(
    existing_items: Iterable[GroceryItem],
    trip: Trip,
    recipe_lookup: Mapping[UUID, Recipe],
) -> list[GroceryItem]:
    """Fold a trip's ingredients into an existing grocery list.

    Existing lines keep their id, aisle, unit and checked flag; only their
    quantity can grow. Lines the trip never touches come back unchanged.
    When several existing lines share a key, the first one absorbs the
    contributions and the rest pass through untouched. The inputs are not
    mutated.
    """
    acc: dict[str, GroceryItem] = {}
    passthrough: list[GroceryItem] = []
    for item in existing_items:
        key = grocery_key(item.name)
        if key in acc:
            passthrough.append(dataclasses.replace(item))
        else:
            acc[key] = dataclasses.replace(item)

    accumulate(acc, trip, recipe_lookup)
    return _sorted_by_name([*acc.values(), *passthrough])


def pack_to_groceries(
    existing_items: Iterable[GroceryItem],
    pack: QuickPack,
    recipe_lookup: Mapping[UUID, Recipe],
    day: date | None = None,
) -> list[GroceryItem]:
    """Merge a quick pack's ingredients into the current grocery list."""
    return merge_into_existing(existing_items, pack_trip(pack, day), recipe_lookup)


def group_by_aisle(
    items: Iterable[GroceryItem],
    aisle_order: list[Aisle] | None = None,
) -> dict[Aisle, list[GroceryItem]]:
    """Group grocery lines by aisle, skipping empty aisles.

    Aisles follow aisle_order (default: declaration order of Aisle); any
    aisle left out of a custom order is appended in declaration order.
    """
    order = list(aisle_order or [])
    order += [a for a in Aisle if a not in order]

    groups: dict[Aisle, list[GroceryItem]] = {a: [] for a in order}
    for item in items:
        groups[item.aisle].append(item)

    return {a: _sorted_by_name(groups[a]) for a in order if groups[a]}


def clear_checked(items: Iterable[GroceryItem]) -> list[GroceryItem]:
    return [item for item in items if not item.is_checked]


def toggle_checked(items: Iterable[GroceryItem], name: str) -> tuple[list[GroceryItem], int]:
    """Flip the checked flag on every line matching name (case-insensitive)."""
    key = grocery_key(name)
    result = []
    touched = 0
    for item in items:
        if grocery_key(item.name) == key:
            item = dataclasses.replace(item, is_checked=not item.is_checked)
            touched += 1
        result.append(item)
    return result, touched


def remove_item(items: Iterable[GroceryItem], name: str) -> tuple[list[GroceryItem], int]:
    """Drop every line whose key matches name. Returns the new list and the count removed."""
    key = grocery_key(name)
    kept = []
    removed = 0
    for item in items:
        if grocery_key(item.name) == key:
            removed += 1
        else:
            kept.append(item)
    return kept, removed


def make_manual_item(
    name: str,
    quantity: float | None = None,
    unit: Unit | None = None,
    aisle: Aisle = Aisle.OTHER,
) -> GroceryItem:
    """Create a hand-entered grocery line. A unit without a quantity is dropped."""
    if not name.strip():
        raise ValueError("Grocery item name cannot be empty")
    return GroceryItem(
        name=name.strip(),
        aisle=aisle,
        quantity=quantity,
        unit=unit if quantity is not None else None,
    )


def format_qty(qty: float) -> str:
    """Format a quantity as a practical fraction or decimal."""
    if qty == 0:
        return "0"

    fractions = {
        0.25: "1/4",
        0.33: "1/3",
        0.5: "1/2",
        0.67: "2/3",
        0.75: "3/4",
    }

    whole = int(qty)
    frac = qty - whole

    if frac > 0:
        closest = min(fractions.keys(), key=lambda f: abs(f - frac))
        if abs(closest - frac) < 0.02:
            frac_str = fractions[closest]
            if whole > 0:
                return f"{whole} {frac_str}"
            return frac_str

    if whole == qty:
        return str(whole)
    return f"{qty:.1f}"


def format_line(item: GroceryItem) -> str:
    parts = []
    if item.quantity is not None:
        parts.append(format_qty(item.quantity))
        if item.unit is not None:
            parts.append(UNIT_LABELS[item.unit])
    parts.append(item.name)
    return " ".join(parts)


def format_groceries_markdown(
    items: Iterable[GroceryItem],
    aisle_order: list[Aisle] | None = None,
) -> str:
    """Format the grocery list as markdown with checkboxes, grouped by aisle."""
    lines = ["# Groceries", ""]

    for aisle, aisle_items in group_by_aisle(items, aisle_order).items():
        lines.append(f"## {AISLE_LABELS[aisle]}")
        lines.append("")
        for item in aisle_items:
            box = "[x]" if item.is_checked else "[ ]"
            lines.append(f"- {box} {format_line(item)}")
        lines.append("")

    return "\n".join(lines)


def format_groceries_json(items: Iterable[GroceryItem]) -> str:
    data = [
        {
            "id": str(item.id),
            "name": item.name,
            "aisle": item.aisle.value,
            "quantity": item.quantity,
            "unit": item.unit.value if item.unit else None,
            "checked": item.is_checked,
        }
        for item in items
    ]
    return json.dumps(data, indent=2)


def aisle_order_from_config(config: dict) -> list[Aisle]:
    """Read groceries.aisle_order from config, rejecting unknown aisle names."""
    order = []
    for raw in config["groceries"]["aisle_order"]:
        try:
            order.append(Aisle(raw))
        except ValueError:
            valid = ", ".join(a.value for a in Aisle)
            raise ValueError(
                f"Unknown aisle '{raw}' in groceries.aisle_order (valid: {valid})"
            ) from None
    return order


def _print_groceries(items: list[GroceryItem], config: dict) -> None:
    try:
        aisle_order = aisle_order_from_config(config)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    groceries_cfg = config["groceries"]
    if groceries_cfg["hide_checked"]:
        items = clear_checked(items)

    if not items:
        logger.warning("Grocery list is empty")
        return

    if groceries_cfg["output_format"] == "json":
        print(format_groceries_json(items))
    else:
        print(format_groceries_markdown(items, aisle_order))


def run_generate(
    data_dir: Path,
    trip_name: str,
    merge: bool = False,
    output_format: str | None = None,
) -> None:
    """CLI entry point for generate command."""
    config = apply_cli_overrides(load_config(data_dir), output_format=output_format)
    path = store_path(data_dir, config)
    store = load_store(path)

    try:
        trip = find_trip(store.trips, trip_name)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    lookup = store.recipe_lookup()
    if merge:
        store.groceries = merge_into_existing(store.groceries, trip, lookup)
    else:
        store.groceries = aggregate(trip, lookup)
    save_store(path, store)

    logger.info("Grocery list for '%s': %d items", trip.name, len(store.groceries))
    _print_groceries(store.groceries, config)


def run_pack(data_dir: Path, pack_name: str, output_format: str | None = None) -> None:
    """CLI entry point for pack command (quick pack to groceries)."""
    config = apply_cli_overrides(load_config(data_dir), output_format=output_format)
    path = store_path(data_dir, config)
    store = load_store(path)

    try:
        pack = find_pack(store.quick_packs, pack_name)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    store.groceries = pack_to_groceries(store.groceries, pack, store.recipe_lookup())
    save_store(path, store)

    logger.info("Added pack '%s' to groceries", pack.title)
    _print_groceries(store.groceries, config)


def run_show(
    data_dir: Path,
    output_format: str | None = None,
    hide_checked: bool | None = None,
) -> None:
    """CLI entry point for groceries command."""
    config = apply_cli_overrides(
        load_config(data_dir),
        output_format=output_format,
        hide_checked=hide_checked,
    )
    store = load_store(store_path(data_dir, config))
    _print_groceries(store.groceries, config)


def run_check(data_dir: Path, name: str) -> None:
    """CLI entry point for check command."""
    config = load_config(data_dir)
    path = store_path(data_dir, config)
    store = load_store(path)

    store.groceries, touched = toggle_checked(store.groceries, name)
    if not touched:
        print(f"No grocery item named '{name}'", file=sys.stderr)
        sys.exit(1)

    save_store(path, store)
    logger.info("Toggled %d item(s) named '%s'", touched, name)


def run_add_item(
    data_dir: Path,
    name: str,
    quantity: float | None = None,
    unit: str | None = None,
    aisle: str = "other",
) -> None:
    """CLI entry point for add-item command."""
    config = load_config(data_dir)
    path = store_path(data_dir, config)
    store = load_store(path)

    try:
        item = make_manual_item(
            name,
            quantity=quantity,
            unit=Unit(unit) if unit else None,
            aisle=Aisle(aisle),
        )
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    store.groceries.append(item)
    save_store(path, store)
    logger.info("Added '%s' to groceries", item.name)


def run_remove_item(data_dir: Path, name: str) -> None:
    """CLI entry point for remove-item command."""
    config = load_config(data_dir)
    path = store_path(data_dir, config)
    store = load_store(path)

    store.groceries, removed = remove_item(store.groceries, name)
    if not removed:
        print(f"No grocery item named '{name}'", file=sys.stderr)
        sys.exit(1)

    save_store(path, store)
    logger.info("Removed %d item(s) named '%s'", removed, name)


def run_clear_checked(data_dir: Path) -> None:
    """CLI entry point for clear-checked command."""
    config = load_config(data_dir)
    path = store_path(data_dir, config)
    store = load_store(path)

    before = len(store.groceries)
    store.groceries = clear_checked(store.groceries)
    save_store(path, store)
    logger.info("Removed %d checked item(s)", before - len(store.groceries))
