"""Recipe search, filtering and favorites."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from uuid import UUID

from trip_planner.config import load_config
from trip_planner.models import TAG_LABELS, Aisle, Ingredient, Recipe, Store, Tag
from trip_planner.planner import find_recipe
from trip_planner.store import load_store, save_store, store_path

logger = logging.getLogger(__name__)


def matches_query(recipe: Recipe, query: str | None) -> bool:
    """Check if the query appears in the title or any ingredient name."""
    if not query or not query.strip():
        return True
    q = query.strip().lower()
    if q in recipe.title.lower():
        return True
    return any(q in ing.name.lower() for ing in recipe.ingredients)


def matches_tags(recipe: Recipe, tags: list[Tag] | None) -> bool:
    """Check if the recipe shares at least one tag with tags."""
    if not tags:
        return True
    return not set(recipe.tags).isdisjoint(tags)


def filter_recipes(
    recipes: list[Recipe],
    query: str | None = None,
    tags: list[Tag] | None = None,
    no_fridge: bool = False,
    favorites_only: bool = False,
    favorites: set[UUID] | None = None,
) -> list[Recipe]:
    """Apply search filters, keeping catalog order."""
    result = []
    for r in recipes:
        if no_fridge and Tag.NO_FRIDGE not in r.tags:
            continue
        if favorites_only and r.id not in (favorites or set()):
            continue
        if not matches_tags(r, tags):
            continue
        if not matches_query(r, query):
            continue
        result.append(r)
    return result


def parse_tags(tags: str | None) -> list[Tag] | None:
    """Parse a comma-separated tag list such as "road,no-fridge"."""
    if not tags:
        return None
    try:
        return [Tag(t.strip()) for t in tags.split(",") if t.strip()]
    except ValueError:
        valid = ", ".join(t.value for t in Tag)
        raise ValueError(f"Unknown tag in '{tags}'. Valid: {valid}") from None


def _parse_minutes(raw: str | None) -> int | None:
    try:
        return int(raw.strip()) if raw else None
    except ValueError:
        return None


def new_recipe(
    title: str,
    ingredients_line: str = "",
    steps_text: str = "",
    tags: list[Tag] | None = None,
    time: str | None = None,
) -> Recipe:
    """Build a recipe from quick-entry text.

    Ingredients come from one comma-separated line and steps from one step
    per line; blank entries are dropped. Ingredients carry no quantity or
    unit and land in the "other" aisle. A time that is not a whole number
    is left unset.
    """
    title = title.strip()
    if not title:
        raise ValueError("Recipe title cannot be empty")

    ingredients = [
        Ingredient(name=part.strip(), aisle=Aisle.OTHER)
        for part in ingredients_line.split(",")
        if part.strip()
    ]
    steps = [line.strip() for line in steps_text.splitlines() if line.strip()]
    return Recipe(
        title=title,
        ingredients=ingredients,
        tags=list(tags or []),
        time_minutes=_parse_minutes(time),
        steps=steps,
    )


def toggle_favorite(store: Store, recipe_id: UUID) -> bool:
    """Flip a recipe's favorite state. Returns the new state."""
    if recipe_id in store.favorites:
        store.favorites.remove(recipe_id)
    else:
        store.favorites.add(recipe_id)

    is_favorite = recipe_id in store.favorites
    for r in store.recipes:
        if r.id == recipe_id:
            r.is_favorite = is_favorite
    return is_favorite


def format_table(recipes: list[Recipe], favorites: set[UUID]) -> str:
    """Format recipes as a readable table."""
    lines = []
    header = f"{'#':<3} {'Fav':<4} {'Time':<6} {'Ingr':<5} {'Recipe':<30} {'Tags'}"
    lines.append(header)
    lines.append("-" * len(header))

    for i, r in enumerate(recipes, 1):
        fav = "*" if r.id in favorites else ""
        time_str = f"{r.time_minutes}m" if r.time_minutes else "?"
        tags = ", ".join(TAG_LABELS[t] for t in r.tags)
        lines.append(
            f"{i:<3} {fav:<4} {time_str:<6} {len(r.ingredients):<5} {r.title:<30} {tags}"
        )

    return "\n".join(lines)


def format_json(recipes: list[Recipe], favorites: set[UUID]) -> str:
    """Format recipes as JSON."""
    data = []
    for r in recipes:
        data.append(
            {
                "id": str(r.id),
                "title": r.title,
                "favorite": r.id in favorites,
                "time_minutes": r.time_minutes,
                "tags": [t.value for t in r.tags],
                "ingredients": [
                    {
                        "name": ing.name,
                        "quantity": ing.quantity,
                        "unit": ing.unit.value if ing.unit else None,
                        "aisle": ing.aisle.value,
                    }
                    for ing in r.ingredients
                ],
                "steps": r.steps,
            }
        )
    return json.dumps(data, indent=2)


def run_recipes(
    data_dir: Path,
    query: str | None = None,
    tags: str | None = None,
    no_fridge: bool = False,
    favorites_only: bool = False,
    output_format: str = "table",
) -> None:
    """CLI entry point for recipes command."""
    config = load_config(data_dir)
    store = load_store(store_path(data_dir, config))

    try:
        tag_list = parse_tags(tags)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    recipes = filter_recipes(
        store.recipes,
        query=query,
        tags=tag_list,
        no_fridge=no_fridge,
        favorites_only=favorites_only,
        favorites=store.favorites,
    )

    if not recipes:
        logger.warning("No recipes match the given filters")
        return

    if output_format == "json":
        print(format_json(recipes, store.favorites))
    else:
        print(format_table(recipes, store.favorites))


def run_favorite(data_dir: Path, recipe_name: str) -> None:
    """CLI entry point for favorite command."""
    config = load_config(data_dir)
    path = store_path(data_dir, config)
    store = load_store(path)

    try:
        recipe = find_recipe(store.recipes, recipe_name)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    state = toggle_favorite(store, recipe.id)
    save_store(path, store)
    logger.info("'%s' %s favorites", recipe.title, "added to" if state else "removed from")


def run_add_recipe(
    data_dir: Path,
    title: str,
    ingredients: str = "",
    steps: str = "",
    tags: str | None = None,
    time: str | None = None,
) -> None:
    """CLI entry point for add-recipe command."""
    config = load_config(data_dir)
    path = store_path(data_dir, config)
    store = load_store(path)

    try:
        recipe = new_recipe(
            title,
            ingredients_line=ingredients,
            steps_text=steps,
            tags=parse_tags(tags),
            time=time,
        )
    except ValueError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    store.recipes.append(recipe)
    save_store(path, store)
    logger.info("Added recipe '%s' with %d ingredients", recipe.title, len(recipe.ingredients))
