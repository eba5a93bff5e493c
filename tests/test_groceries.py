"""Tests for grocery aggregation and list maintenance."""

from datetime import date
from uuid import uuid4

import pytest
from trip_planner.groceries import (
    aggregate,
    aisle_order_from_config,
    clear_checked,
    format_groceries_json,
    format_groceries_markdown,
    format_qty,
    group_by_aisle,
    grocery_key,
    make_manual_item,
    merge_into_existing,
    pack_to_groceries,
    remove_item,
    toggle_checked,
)
from trip_planner.models import (
    Aisle,
    GroceryItem,
    Ingredient,
    MealType,
    QuickPack,
    Recipe,
    Unit,
)

B, L, D, S = MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER, MealType.SNACK


def _by_name(items):
    return {item.name: item for item in items}


class TestGroceryKey:
    def test_lowercases(self):
        assert grocery_key("Milk") == "milk"

    def test_trims(self):
        assert grocery_key("  Olive Oil \t") == "olive oil"


class TestAggregate:
    def test_empty_trip(self, make_trip, lookup):
        assert aggregate(make_trip(), lookup) == []

    def test_empty_slots(self, make_trip, lookup):
        trip = make_trip([(B, []), (L, [])], [])
        assert aggregate(trip, lookup) == []

    def test_empty_catalog(self, make_trip, sample_recipes):
        trip = make_trip([(B, [sample_recipes[0].id])])
        assert aggregate(trip, {}) == []

    def test_single_recipe_keeps_fields(self, make_trip, sample_recipes, lookup):
        trip = make_trip([(B, [sample_recipes[0].id])])
        items = aggregate(trip, lookup)
        assert [i.name for i in items] == ["Honey", "Milk", "Oats"]
        milk = _by_name(items)["Milk"]
        assert milk.quantity == 200
        assert milk.unit == Unit.ML
        assert milk.aisle == Aisle.DAIRY
        assert milk.is_checked is False
        assert milk.recipe_ref is None

    def test_dangling_reference_is_skipped(self, make_trip, sample_recipes, lookup):
        oats = sample_recipes[0]
        with_stale = make_trip([(B, [uuid4(), oats.id, uuid4()])])
        without = make_trip([(B, [oats.id])])

        got = [(i.name, i.quantity, i.unit) for i in aggregate(with_stale, lookup)]
        want = [(i.name, i.quantity, i.unit) for i in aggregate(without, lookup)]
        assert got == want

    def test_case_insensitive_merge_sums(self, make_trip, sample_recipes, lookup):
        oats, tea = sample_recipes[0], sample_recipes[1]
        trip = make_trip([(B, [oats.id]), (S, [tea.id])])
        items = aggregate(trip, lookup)

        milks = [i for i in items if i.name.lower() == "milk"]
        assert len(milks) == 1
        assert milks[0].name == "Milk"
        assert milks[0].quantity == 300
        assert milks[0].unit == Unit.ML

    def test_first_seen_wins_for_name_and_aisle(self, make_trip, sample_recipes, lookup):
        oats, tea = sample_recipes[0], sample_recipes[1]
        trip = make_trip([(B, [tea.id, oats.id])])
        milk = _by_name(aggregate(trip, lookup))["milk"]
        assert milk.aisle == Aisle.OTHER
        assert milk.quantity == 300

    def test_missing_quantity_does_not_erase(self, make_trip, sample_recipes, lookup):
        tuna, salad = sample_recipes[2], sample_recipes[3]
        trip = make_trip([(L, [tuna.id])], [(L, [salad.id])])
        oil = _by_name(aggregate(trip, lookup))["Oil"]
        assert oil.quantity == 1
        assert oil.unit == Unit.TBSP
        assert oil.aisle == Aisle.CONDIMENTS

    def test_missing_quantity_first_stays_missing(self, make_trip, sample_recipes, lookup):
        tuna, salad = sample_recipes[2], sample_recipes[3]
        trip = make_trip([(L, [salad.id, tuna.id])])
        oil = _by_name(aggregate(trip, lookup))["Oil"]
        assert oil.quantity is None
        assert oil.unit is None
        assert oil.aisle == Aisle.OTHER

    def test_unit_mismatch_keeps_first(self, make_trip):
        a = Recipe(title="A", ingredients=[Ingredient("Rice", 500, Unit.G)])
        b = Recipe(title="B", ingredients=[Ingredient("rice", 1, Unit.KG)])
        trip = make_trip([(L, [a.id]), (D, [b.id])])
        (rice,) = aggregate(trip, {a.id: a, b.id: b})
        assert rice.quantity == 500
        assert rice.unit == Unit.G

    def test_both_units_missing_still_sums(self, make_trip):
        a = Recipe(title="A", ingredients=[Ingredient("Eggs", 2)])
        b = Recipe(title="B", ingredients=[Ingredient("eggs", 3)])
        trip = make_trip([(B, [a.id, b.id])])
        (eggs,) = aggregate(trip, {a.id: a, b.id: b})
        assert eggs.quantity == 5
        assert eggs.unit is None

    def test_whitespace_variants_merge(self, make_trip):
        a = Recipe(title="A", ingredients=[Ingredient("Milk", 1, Unit.L)])
        b = Recipe(title="B", ingredients=[Ingredient("  milk ", 1, Unit.L)])
        trip = make_trip([(B, [a.id, b.id])])
        (milk,) = aggregate(trip, {a.id: a, b.id: b})
        assert milk.name == "Milk"
        assert milk.quantity == 2

    def test_sorted_regardless_of_plan_order(self, make_trip, sample_recipes, lookup):
        salad, apple = sample_recipes[3], sample_recipes[4]
        trip = make_trip([(L, [salad.id]), (S, [apple.id])])
        names = [i.name for i in aggregate(trip, lookup)]
        assert names.index("Apple") < names.index("Zucchini")

        reversed_trip = make_trip([(L, [apple.id]), (S, [salad.id])])
        assert [i.name for i in aggregate(reversed_trip, lookup)] == names

    def test_sort_is_ordinal(self, make_trip):
        r = Recipe(title="R", ingredients=[
            Ingredient("banana"), Ingredient("Zucchini"), Ingredient("apple"), Ingredient("Cherry"),
        ])
        trip = make_trip([(S, [r.id])])
        names = [i.name for i in aggregate(trip, {r.id: r})]
        assert names == ["Cherry", "Zucchini", "apple", "banana"]

    def test_repeated_recipe_accumulates(self, make_trip, sample_recipes, lookup):
        oats = sample_recipes[0]
        trip = make_trip([(B, [oats.id]), (S, [oats.id])])
        items = _by_name(aggregate(trip, lookup))
        assert items["Oats"].quantity == 120
        assert items["Milk"].quantity == 400
        assert items["Honey"].quantity == 2

    def test_repeats_across_days(self, make_trip, sample_recipes, lookup):
        apple = sample_recipes[4]
        trip = make_trip([(S, [apple.id])], [(S, [apple.id])], [(S, [apple.id, apple.id])])
        (item,) = aggregate(trip, lookup)
        assert item.quantity == 8

    def test_deterministic_content_fresh_ids(self, make_trip, sample_recipes, lookup):
        trip = make_trip([(B, [r.id for r in sample_recipes])], [(D, [sample_recipes[2].id])])
        first = aggregate(trip, lookup)
        second = aggregate(trip, lookup)

        def content(items):
            return [(i.name, i.aisle, i.quantity, i.unit) for i in items]

        assert content(first) == content(second)
        assert {i.id for i in first}.isdisjoint({i.id for i in second})

    def test_inputs_not_mutated(self, make_trip, sample_recipes, lookup):
        oats = sample_recipes[0]
        trip = make_trip([(B, [oats.id, oats.id])])
        aggregate(trip, lookup)
        assert oats.ingredients[1].quantity == 200
        assert trip.days[0].meals[0].recipe_ids == [oats.id, oats.id]


class TestMergeIntoExisting:
    def test_untouched_items_preserved(self, make_trip, sample_recipes, lookup):
        salt = GroceryItem(name="Salt", aisle=Aisle.CONDIMENTS, is_checked=True)
        trip = make_trip([(B, [sample_recipes[0].id])])
        items = _by_name(merge_into_existing([salt], trip, lookup))

        assert items["Salt"].is_checked is True
        assert items["Salt"].id == salt.id
        assert items["Salt"].quantity is None
        assert items["Milk"].is_checked is False

    def test_existing_item_absorbs_contribution(self, make_trip, sample_recipes, lookup):
        milk = GroceryItem(name="MILK", aisle=Aisle.BEVERAGES, quantity=100,
                           unit=Unit.ML, is_checked=True)
        trip = make_trip([(B, [sample_recipes[0].id])])
        items = _by_name(merge_into_existing([milk], trip, lookup))

        merged = items["MILK"]
        assert "Milk" not in items
        assert merged.quantity == 300
        assert merged.id == milk.id
        assert merged.aisle == Aisle.BEVERAGES
        assert merged.is_checked is True

    def test_existing_without_quantity_not_summed(self, make_trip, sample_recipes, lookup):
        oats = GroceryItem(name="Oats")
        trip = make_trip([(B, [sample_recipes[0].id])])
        items = _by_name(merge_into_existing([oats], trip, lookup))
        assert items["Oats"].quantity is None

    def test_existing_list_not_mutated(self, make_trip, sample_recipes, lookup):
        milk = GroceryItem(name="Milk", quantity=100, unit=Unit.ML)
        existing = [milk]
        trip = make_trip([(B, [sample_recipes[0].id])])
        merge_into_existing(existing, trip, lookup)
        assert existing == [milk]
        assert milk.quantity == 100

    def test_duplicate_existing_keys(self, make_trip, sample_recipes, lookup):
        first = GroceryItem(name="Milk", quantity=50, unit=Unit.ML)
        second = GroceryItem(name="milk", quantity=10, unit=Unit.ML, is_checked=True)
        trip = make_trip([(B, [sample_recipes[0].id])])
        items = merge_into_existing([first, second], trip, lookup)

        by_id = {i.id: i for i in items}
        assert by_id[first.id].quantity == 250
        assert by_id[second.id].quantity == 10
        assert by_id[second.id].is_checked is True

    def test_empty_trip_returns_sorted_existing(self, make_trip, lookup):
        existing = [GroceryItem(name="Water"), GroceryItem(name="Bread")]
        items = merge_into_existing(existing, make_trip(), lookup)
        assert [i.name for i in items] == ["Bread", "Water"]

    def test_matches_aggregate_on_empty_list(self, make_trip, sample_recipes, lookup):
        trip = make_trip([(B, [r.id for r in sample_recipes])])

        def content(items):
            return [(i.name, i.aisle, i.quantity, i.unit, i.is_checked) for i in items]

        assert content(merge_into_existing([], trip, lookup)) == content(aggregate(trip, lookup))


class TestPackToGroceries:
    def test_pack_merges(self, sample_recipes, lookup):
        pack = QuickPack(title="Breakfast Pack", recipe_ids=[sample_recipes[0].id, sample_recipes[1].id])
        existing = [GroceryItem(name="Salt", is_checked=True)]
        items = _by_name(pack_to_groceries(existing, pack, lookup, day=date(2026, 5, 1)))

        assert items["Milk"].quantity == 300
        assert items["Salt"].is_checked is True
        assert "Tea bags" in items

    def test_pack_with_stale_ids(self, lookup):
        pack = QuickPack(title="Stale", recipe_ids=[uuid4()])
        assert pack_to_groceries([], pack, lookup) == []


class TestGroupByAisle:
    def test_declaration_order_and_skips_empty(self):
        items = [
            GroceryItem(name="Salt", aisle=Aisle.CONDIMENTS),
            GroceryItem(name="Tomato", aisle=Aisle.PRODUCE),
            GroceryItem(name="Apple", aisle=Aisle.PRODUCE),
        ]
        groups = group_by_aisle(items)
        assert list(groups) == [Aisle.PRODUCE, Aisle.CONDIMENTS]
        assert [i.name for i in groups[Aisle.PRODUCE]] == ["Apple", "Tomato"]

    def test_custom_order(self):
        items = [
            GroceryItem(name="Milk", aisle=Aisle.DAIRY),
            GroceryItem(name="Bread", aisle=Aisle.BAKERY),
            GroceryItem(name="Tape", aisle=Aisle.OTHER),
        ]
        groups = group_by_aisle(items, [Aisle.DAIRY])
        assert list(groups) == [Aisle.DAIRY, Aisle.BAKERY, Aisle.OTHER]


class TestListMaintenance:
    def test_clear_checked(self):
        items = [GroceryItem(name="A", is_checked=True), GroceryItem(name="B")]
        assert [i.name for i in clear_checked(items)] == ["B"]

    def test_toggle_checked(self):
        items = [GroceryItem(name="Milk"), GroceryItem(name="Bread")]
        toggled, touched = toggle_checked(items, " milk")
        assert touched == 1
        assert toggled[0].is_checked is True
        assert items[0].is_checked is False

        toggled_back, _ = toggle_checked(toggled, "MILK")
        assert toggled_back[0].is_checked is False

    def test_toggle_unknown(self):
        _, touched = toggle_checked([GroceryItem(name="Milk")], "Bread")
        assert touched == 0

    def test_remove_item_by_key(self):
        items = [GroceryItem(name="Milk"), GroceryItem(name="Bread"), GroceryItem(name="milk ")]
        kept, removed = remove_item(items, "MILK")
        assert removed == 2
        assert [i.name for i in kept] == ["Bread"]
        assert len(items) == 3

    def test_remove_unknown(self):
        kept, removed = remove_item([GroceryItem(name="Milk")], "Bread")
        assert removed == 0
        assert [i.name for i in kept] == ["Milk"]

    def test_manual_item_drops_unit_without_quantity(self):
        item = make_manual_item("Water", unit=Unit.L, aisle=Aisle.BEVERAGES)
        assert item.unit is None
        assert item.quantity is None
        assert item.aisle == Aisle.BEVERAGES

    def test_manual_item_with_quantity(self):
        item = make_manual_item("  Water ", 2, Unit.L)
        assert item.name == "Water"
        assert item.unit == Unit.L
        assert item.is_checked is False

    def test_manual_item_blank_name(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            make_manual_item("   ")


class TestFormatting:
    def test_format_qty(self):
        assert format_qty(300.0) == "300"
        assert format_qty(0.5) == "1/2"
        assert format_qty(1.5) == "1 1/2"
        assert format_qty(2.2) == "2.2"

    def test_markdown(self):
        items = [
            GroceryItem(name="Milk", aisle=Aisle.DAIRY, quantity=300, unit=Unit.ML),
            GroceryItem(name="Salt", aisle=Aisle.CONDIMENTS, is_checked=True),
            GroceryItem(name="Eggs", aisle=Aisle.DAIRY, quantity=6),
        ]
        md = format_groceries_markdown(items)
        assert md.startswith("# Groceries")
        assert md.index("## Dairy") < md.index("## Condiments")
        assert "- [ ] 300 ml Milk" in md
        assert "- [ ] 6 Eggs" in md
        assert "- [x] Salt" in md

    def test_json(self):
        import json

        item = GroceryItem(name="Milk", aisle=Aisle.DAIRY, quantity=300, unit=Unit.ML)
        data = json.loads(format_groceries_json([item]))
        assert data == [{
            "id": str(item.id),
            "name": "Milk",
            "aisle": "dairy",
            "quantity": 300,
            "unit": "ml",
            "checked": False,
        }]


class TestAisleOrderFromConfig:
    def test_default_order(self):
        from trip_planner.config import DEFAULTS

        assert aisle_order_from_config(DEFAULTS) == list(Aisle)

    def test_unknown_aisle(self):
        config = {"groceries": {"aisle_order": ["produce", "garage"]}}
        with pytest.raises(ValueError, match="Unknown aisle 'garage'"):
            aisle_order_from_config(config)
