"""CLI entry point for the trip planner."""

from __future__ import annotations

import argparse
from pathlib import Path

from trip_planner.log import LEVELS
from trip_planner.models import Aisle, MealType, Unit

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "trip-planner"


def get_data_dir(args: argparse.Namespace) -> Path:
    return Path(args.data_dir).expanduser() if args.data_dir else DEFAULT_DATA_DIR


def cmd_recipes(args: argparse.Namespace) -> None:
    from trip_planner.recipes import run_recipes

    run_recipes(
        data_dir=get_data_dir(args),
        query=args.query,
        tags=args.tags,
        no_fridge=args.no_fridge,
        favorites_only=args.favorites,
        output_format=args.format,
    )


def cmd_favorite(args: argparse.Namespace) -> None:
    from trip_planner.recipes import run_favorite

    run_favorite(data_dir=get_data_dir(args), recipe_name=args.recipe)


def cmd_add_recipe(args: argparse.Namespace) -> None:
    from trip_planner.recipes import run_add_recipe

    run_add_recipe(
        data_dir=get_data_dir(args),
        title=args.title,
        ingredients=args.ingredients,
        steps=args.steps,
        tags=args.tags,
        time=args.time,
    )


def cmd_trips(args: argparse.Namespace) -> None:
    from trip_planner.planner import run_trips

    run_trips(data_dir=get_data_dir(args), trip_name=args.trip)


def cmd_new_trip(args: argparse.Namespace) -> None:
    from trip_planner.planner import run_new_trip

    run_new_trip(
        data_dir=get_data_dir(args),
        name=args.name,
        start_date=args.start_date,
        end_date=args.end_date,
    )


def cmd_plan_add(args: argparse.Namespace) -> None:
    from trip_planner.planner import run_plan_add

    run_plan_add(
        data_dir=get_data_dir(args),
        recipe_name=args.recipe,
        trip_name=args.trip,
        day=args.day,
        meal=args.meal,
    )


def cmd_plan_remove(args: argparse.Namespace) -> None:
    from trip_planner.planner import run_plan_remove

    run_plan_remove(
        data_dir=get_data_dir(args),
        recipe_name=args.recipe,
        trip_name=args.trip,
        day=args.day,
        meal=args.meal,
    )


def cmd_delete_trip(args: argparse.Namespace) -> None:
    from trip_planner.planner import run_delete_trip

    run_delete_trip(data_dir=get_data_dir(args), trip_name=args.trip)


def cmd_generate(args: argparse.Namespace) -> None:
    from trip_planner.groceries import run_generate

    run_generate(
        data_dir=get_data_dir(args),
        trip_name=args.trip,
        merge=args.merge,
        output_format=args.format,
    )


def cmd_pack(args: argparse.Namespace) -> None:
    if args.plan:
        from trip_planner.planner import run_pack_to_plan

        run_pack_to_plan(data_dir=get_data_dir(args), pack_name=args.pack)
        return

    from trip_planner.groceries import run_pack

    run_pack(data_dir=get_data_dir(args), pack_name=args.pack, output_format=args.format)


def cmd_groceries(args: argparse.Namespace) -> None:
    from trip_planner.groceries import run_show

    run_show(
        data_dir=get_data_dir(args),
        output_format=args.format,
        hide_checked=args.hide_checked or None,
    )


def cmd_check(args: argparse.Namespace) -> None:
    from trip_planner.groceries import run_check

    run_check(data_dir=get_data_dir(args), name=args.name)


def cmd_add_item(args: argparse.Namespace) -> None:
    from trip_planner.groceries import run_add_item

    run_add_item(
        data_dir=get_data_dir(args),
        name=args.name,
        quantity=args.qty,
        unit=args.unit,
        aisle=args.aisle,
    )


def cmd_remove_item(args: argparse.Namespace) -> None:
    from trip_planner.groceries import run_remove_item

    run_remove_item(data_dir=get_data_dir(args), name=args.name)


def cmd_clear_checked(args: argparse.Namespace) -> None:
    from trip_planner.groceries import run_clear_checked

    run_clear_checked(data_dir=get_data_dir(args))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trip-planner",
        description="Trip meal planning and grocery lists, stored locally",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help=f"Directory holding the store and preferences (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument(
        "--log-level",
        choices=list(LEVELS),
        default="info",
        help="Logging verbosity (default: info)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    meal_choices = [m.value for m in MealType]

    # recipes
    p_recipes = sub.add_parser("recipes", help="Search and list recipes")
    p_recipes.add_argument("query", nargs="?", help="Match title or ingredient name")
    p_recipes.add_argument("--tags", type=str, help="Comma-separated tags (any match)")
    p_recipes.add_argument("--no-fridge", action="store_true", help="Only no-fridge recipes")
    p_recipes.add_argument("--favorites", action="store_true", help="Only favorites")
    p_recipes.add_argument(
        "--format", type=str, choices=["json", "table"], default="table"
    )
    p_recipes.set_defaults(func=cmd_recipes)

    # favorite
    p_fav = sub.add_parser("favorite", help="Toggle a recipe's favorite flag")
    p_fav.add_argument("recipe", type=str, help="Recipe title (substring matched)")
    p_fav.set_defaults(func=cmd_favorite)

    # add-recipe
    p_recipe = sub.add_parser("add-recipe", help="Add a recipe from quick-entry text")
    p_recipe.add_argument("title", type=str)
    p_recipe.add_argument(
        "--ingredients", type=str, default="", help="Comma-separated ingredient names"
    )
    p_recipe.add_argument("--steps", type=str, default="", help="One step per line")
    p_recipe.add_argument("--tags", type=str, help="Comma-separated tags")
    p_recipe.add_argument("--time", type=str, help="Prep time in minutes")
    p_recipe.set_defaults(func=cmd_add_recipe)

    # trips
    p_trips = sub.add_parser("trips", help="List trips or show one trip's plan")
    p_trips.add_argument("trip", nargs="?", help="Trip name to show in detail")
    p_trips.set_defaults(func=cmd_trips)

    # new-trip
    p_new = sub.add_parser("new-trip", help="Create a trip with empty meal slots")
    p_new.add_argument("name", type=str)
    p_new.add_argument("--start-date", type=str, required=True, help="YYYY-MM-DD")
    p_new.add_argument(
        "--end-date", type=str, help="YYYY-MM-DD (default: day after start)"
    )
    p_new.set_defaults(func=cmd_new_trip)

    # plan-add
    p_add = sub.add_parser("plan-add", help="Add a recipe to a meal slot")
    p_add.add_argument("recipe", type=str, help="Recipe title (substring matched)")
    p_add.add_argument(
        "--trip", type=str, help="Trip name (default: first day of the first trip)"
    )
    p_add.add_argument("--day", type=int, default=1, help="1-based day of the trip")
    p_add.add_argument("--meal", type=str, choices=meal_choices)
    p_add.set_defaults(func=cmd_plan_add)

    # plan-remove
    p_rm = sub.add_parser("plan-remove", help="Remove a recipe from a meal slot")
    p_rm.add_argument("recipe", type=str, help="Recipe title (substring matched)")
    p_rm.add_argument("--trip", type=str, required=True, help="Trip name")
    p_rm.add_argument("--day", type=int, default=1, help="1-based day of the trip")
    p_rm.add_argument("--meal", type=str, choices=meal_choices)
    p_rm.set_defaults(func=cmd_plan_remove)

    # delete-trip
    p_del = sub.add_parser("delete-trip", help="Delete a trip")
    p_del.add_argument("trip", type=str, help="Trip name")
    p_del.set_defaults(func=cmd_delete_trip)

    # generate
    p_gen = sub.add_parser("generate", help="Build the grocery list from a trip")
    p_gen.add_argument("trip", type=str, help="Trip name")
    p_gen.add_argument(
        "--merge",
        action="store_true",
        help="Merge into the current grocery list instead of replacing it",
    )
    p_gen.add_argument("--format", type=str, choices=["json", "markdown"])
    p_gen.set_defaults(func=cmd_generate)

    # pack
    p_pack = sub.add_parser("pack", help="Send a quick pack to groceries or the plan")
    p_pack.add_argument("pack", type=str, help="Quick pack title")
    p_pack.add_argument(
        "--plan", action="store_true", help="Add to the plan instead of groceries"
    )
    p_pack.add_argument("--format", type=str, choices=["json", "markdown"])
    p_pack.set_defaults(func=cmd_pack)

    # groceries
    p_show = sub.add_parser("groceries", help="Show the grocery list")
    p_show.add_argument("--hide-checked", action="store_true")
    p_show.add_argument("--format", type=str, choices=["json", "markdown"])
    p_show.set_defaults(func=cmd_groceries)

    # check
    p_check = sub.add_parser("check", help="Toggle a grocery item's checked flag")
    p_check.add_argument("name", type=str)
    p_check.set_defaults(func=cmd_check)

    # add-item
    p_item = sub.add_parser("add-item", help="Add a grocery item by hand")
    p_item.add_argument("name", type=str)
    p_item.add_argument("--qty", type=float)
    p_item.add_argument("--unit", type=str, choices=[u.value for u in Unit])
    p_item.add_argument(
        "--aisle", type=str, choices=[a.value for a in Aisle], default="other"
    )
    p_item.set_defaults(func=cmd_add_item)

    # remove-item
    p_remove = sub.add_parser("remove-item", help="Delete a grocery item by name")
    p_remove.add_argument("name", type=str)
    p_remove.set_defaults(func=cmd_remove_item)

    # clear-checked
    p_clear = sub.add_parser("clear-checked", help="Remove checked grocery items")
    p_clear.set_defaults(func=cmd_clear_checked)

    return parser


def main() -> None:
    from trip_planner.log import setup_logging

    parser = build_parser()
    args = parser.parse_args()

    log_file = Path(args.log_file) if args.log_file else None
    setup_logging(level=args.log_level, log_file=log_file)

    args.func(args)


if __name__ == "__main__":
    main()
