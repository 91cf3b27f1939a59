"""
Costing Engine

Pure functions for ingredient, recipe, electricity and order costs.

Nothing here performs I/O or raises on bad numbers: a missing
reference or a zero/negative divisor contributes zero. Breakdown
helpers report *why* a line contributed zero so callers can tell a
deleted ingredient apart from a free one.
"""

import math
from collections import namedtuple

from constants import MONEY_PLACES
from utils.numbers import is_positive


# Line statuses for recipe and order breakdowns
LINE_OK = 'ok'
LINE_MISSING_REFERENCE = 'missing_reference'
LINE_INVALID_QUANTITY = 'invalid_quantity'
LINE_MISSING_PACKAGING = 'missing_packaging'

RecipeLineCost = namedtuple('RecipeLineCost', 'usage ingredient cost status')

MenuItemCost = namedtuple('MenuItemCost', 'recipe_cost electricity_cost total per_unit')

OrderLineCost = namedtuple('OrderLineCost', 'making_cost electricity_cost packaging_cost')

PricedLine = namedtuple('PricedLine', 'request menu_item packaging mrp costs status')

OrderTotals = namedtuple(
    'OrderTotals',
    'total_mrp discount total_amount total_making_cost total_electricity_cost total_packaging_cost',
)


def round_money(amount):
    """Round a monetary amount to the persisted precision."""
    return round(amount, MONEY_PLACES)


# =========== INGREDIENTS & RECIPES ===========

def ingredient_unit_cost(ingredient):
    """
    Cost of one unit of an ingredient (costPrice / quantity).

    Returns 0.0 when quantity is not a positive number.
    """
    if ingredient is None or not is_positive(ingredient.quantity):
        return 0.0
    return ingredient.cost_price / ingredient.quantity


def recipe_ingredient_cost(usage, ingredient):
    """
    Cost of one recipe line: consumed quantity times the ingredient's unit cost.

    Args:
        usage: RecipeIngredientUsage from the menu item
        ingredient: The referenced Ingredient, or None if it no longer exists

    Returns:
        The line cost, 0.0 for a missing ingredient or a non-positive quantity
    """
    if ingredient is None or not is_positive(usage.consumed_quantity):
        return 0.0
    return usage.consumed_quantity * ingredient_unit_cost(ingredient)


def resolve_recipe_line(usage, ingredients_by_id):
    """Cost one recipe line against the ingredient index, with its status."""
    ingredient = ingredients_by_id.get(usage.id)
    if ingredient is None:
        return RecipeLineCost(usage, None, 0.0, LINE_MISSING_REFERENCE)
    if not is_positive(usage.consumed_quantity) or not is_positive(ingredient.quantity):
        return RecipeLineCost(usage, ingredient, 0.0, LINE_INVALID_QUANTITY)
    return RecipeLineCost(usage, ingredient, recipe_ingredient_cost(usage, ingredient), LINE_OK)


def recipe_cost_breakdown(menu_item, ingredients_by_id):
    """Per-line costs of a menu item's recipe, in recipe order."""
    return [resolve_recipe_line(usage, ingredients_by_id) for usage in menu_item.ingredients]


def recipe_cost(menu_item, ingredients_by_id):
    """
    Ingredient cost of a full batch run of the recipe.

    Sums every line whose ingredient still exists and whose consumed
    quantity is positive.
    """
    return sum(line.cost for line in recipe_cost_breakdown(menu_item, ingredients_by_id)
               if line.status == LINE_OK)


def effective_menu_item_cost(menu_item, ingredients_by_id):
    """
    The recipe cost to use for a menu item.

    A manually overridden cost is frozen; otherwise the cost is derived
    live from the current ingredient prices.
    """
    if menu_item.cost_overridden:
        return menu_item.cost
    return recipe_cost(menu_item, ingredients_by_id)


# =========== ELECTRICITY ===========

def total_batches(quantity, max_capacity):
    """Number of oven runs needed to bake ``quantity`` units."""
    if not is_positive(quantity) or not is_positive(max_capacity):
        return 0
    return math.ceil(quantity / max_capacity)


def batch_electricity_cost(menu_item, rate_per_hour, quantity=None):
    """
    Oven electricity cost of baking a quantity of a menu item.

    Args:
        menu_item: MenuItem with max_capacity and baking_duration
        rate_per_hour: Electricity tariff per hour of baking
        quantity: Units to bake. Defaults to the recipe's baked_quantity
            (catalog view); order lines pass the ordered unit count.

    Returns:
        batches * baking_duration minutes * rate_per_hour / 60
    """
    if quantity is None:
        quantity = menu_item.baked_quantity
    batches = total_batches(quantity, menu_item.max_capacity)
    duration_minutes = batches * (menu_item.baking_duration or 0)
    return duration_minutes * rate_per_hour / 60


def menu_item_display_cost(menu_item, rate_per_hour):
    """Total and per-unit cost of one full recipe run, electricity included."""
    electricity = batch_electricity_cost(menu_item, rate_per_hour)
    total = menu_item.cost + electricity
    per_unit = total / menu_item.baked_quantity if menu_item.baked_quantity > 0 else 0.0
    return MenuItemCost(menu_item.cost, electricity, total, per_unit)


# =========== ORDERS ===========

def find_packaging_option(menu_item, packaging_value):
    """The menu item's packaging option for a pack size, or None."""
    for option in menu_item.packaging_options:
        if option.value == packaging_value:
            return option
    return None


def order_line_cost(line_item, menu_item, rate_per_hour):
    """
    Making, electricity and packaging cost of one order line.

    Making cost allocates the recipe cost per baked unit to the ordered
    units; electricity is computed from the ordered units, not from the
    recipe's baked quantity.
    """
    units = line_item.quantity * line_item.packaging_value

    if menu_item.baked_quantity > 0:
        making = menu_item.cost / menu_item.baked_quantity * units
    else:
        making = 0.0

    electricity = batch_electricity_cost(menu_item, rate_per_hour, quantity=units)

    option = find_packaging_option(menu_item, line_item.packaging_value)
    packaging = (option.packaging_cost or 0.0) * line_item.quantity if option else 0.0

    return OrderLineCost(making, electricity, packaging)


def price_order_line(line_item, menu_by_id, rate_per_hour):
    """
    Resolve an order line against the menu and price it.

    Returns:
        PricedLine; ``status`` is LINE_OK only when the menu item, the
        pack size and a positive quantity are all present.
    """
    menu_item = menu_by_id.get(line_item.id)
    if menu_item is None:
        return PricedLine(line_item, None, None, 0.0, None, LINE_MISSING_REFERENCE)

    if not is_positive(line_item.quantity) or not is_positive(line_item.packaging_value):
        return PricedLine(line_item, menu_item, None, 0.0, None, LINE_INVALID_QUANTITY)

    option = find_packaging_option(menu_item, line_item.packaging_value)
    if option is None:
        return PricedLine(line_item, menu_item, None, 0.0, None, LINE_MISSING_PACKAGING)

    mrp = option.mrp * line_item.quantity
    costs = order_line_cost(line_item, menu_item, rate_per_hour)
    return PricedLine(line_item, menu_item, option, mrp, costs, LINE_OK)


def order_totals(priced_lines, discount):
    """
    Totals for an order from its priced lines.

    Unresolved lines are ignored. The discount is subtracted without a
    floor, so a discount larger than the MRP gives a negative total.
    Sums keep full precision; only the outputs are rounded.
    """
    total_mrp = 0.0
    making = 0.0
    electricity = 0.0
    packaging = 0.0

    for line in priced_lines:
        if line.status != LINE_OK:
            continue
        total_mrp += line.mrp
        making += line.costs.making_cost
        electricity += line.costs.electricity_cost
        packaging += line.costs.packaging_cost

    discount = discount or 0.0
    return OrderTotals(
        total_mrp=round_money(total_mrp),
        discount=round_money(discount),
        total_amount=round_money(total_mrp - discount),
        total_making_cost=round_money(making),
        total_electricity_cost=round_money(electricity),
        total_packaging_cost=round_money(packaging),
    )
