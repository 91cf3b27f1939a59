"""
Form Parsing Service

Validates raw request fields into document schemas. Invalid input
raises FormError with a message suitable for showing to the user.
"""

from constants import (
    INGREDIENT_UNITS,
    UNIT_MAPPINGS,
    VALID_MENU_CATEGORIES,
    MIN_PACKAGING_VALUE,
    MAX_PACKAGING_VALUE,
    MAX_PRICE,
    MAX_QUANTITY,
    MAX_BATCH_CAPACITY,
    MAX_BAKING_DURATION,
    MAX_LENGTHS,
)
from models.schemas import (
    Ingredient,
    MenuItem,
    OrderLineItem,
    PackagingOption,
    RecipeIngredientUsage,
)
from utils.numbers import safe_float
from utils.sanitizer import sanitize_name, sanitize_note


class FormError(ValueError):
    """Raised when submitted form data is invalid."""


_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


def parse_bool(value, field):
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise FormError(f'Invalid value for {field}: {value}')


def _required_name(data, field, max_length):
    name = sanitize_name(data.get(field), max_length=max_length)
    if not name:
        raise FormError(f'{field} is required')
    return name


def _positive_float(data, field, max_val=MAX_PRICE):
    value = safe_float(data.get(field), default=None, max_val=max_val)
    if value is None or value <= 0:
        raise FormError(f'{field} must be a positive number')
    return value


def _whole_number(data, field, default=None, max_val=None):
    value = safe_float(data.get(field), default=None, max_val=max_val)
    if value is None:
        return default
    if not value.is_integer():
        raise FormError(f'{field} must be a whole number')
    return int(value)


def _positive_int(data, field, max_val):
    value = _whole_number(data, field, max_val=max_val)
    if value is None or value <= 0:
        raise FormError(f'{field} must be a positive whole number')
    return value


def _non_negative_float(data, field, default=0.0, max_val=MAX_PRICE):
    value = safe_float(data.get(field), default=None, max_val=max_val)
    if value is None:
        return default
    if value < 0:
        raise FormError(f'{field} cannot be negative')
    return value


def _list_field(data, field):
    value = data.get(field) or []
    if not isinstance(value, list):
        raise FormError(f'{field} must be a list')
    for entry in value:
        if not isinstance(entry, dict):
            raise FormError(f'Every entry of {field} must be an object')
    return value


def normalize_unit(unit):
    """Map a unit alias (e.g. 'g', 'Litres') to its standard unit, or None."""
    unit = UNIT_MAPPINGS.get(str(unit or '').strip().lower())
    return unit if unit in INGREDIENT_UNITS else None


def parse_ingredient_form(data):
    """Ingredient from {name, costPrice, quantity, unit}."""
    unit = normalize_unit(data.get('unit'))
    if unit is None:
        raise FormError(f'Invalid unit: {data.get("unit")}')

    return Ingredient(
        name=_required_name(data, 'name', MAX_LENGTHS['ingredient_name']),
        cost_price=_positive_float(data, 'costPrice'),
        quantity=_positive_float(data, 'quantity', max_val=MAX_QUANTITY),
        unit=unit,
    )


def parse_packaging_options(entries):
    options = []
    seen = set()
    for entry in entries:
        value = _whole_number(entry, 'value')
        if value is None or not MIN_PACKAGING_VALUE <= value <= MAX_PACKAGING_VALUE:
            raise FormError(
                f'Pack size must be between {MIN_PACKAGING_VALUE} and {MAX_PACKAGING_VALUE}')
        if value in seen:
            raise FormError(f'Pack of {value} is listed more than once')
        seen.add(value)
        options.append(PackagingOption(
            value=value,
            mrp=_non_negative_float(entry, 'mrp'),
            packaging_cost=_non_negative_float(entry, 'packagingCost'),
        ))
    return options


def parse_menu_form(data):
    """
    MenuItem from the menu form.

    Recipe lines only need an ingredient id and a consumed quantity;
    names and units are filled in from the ingredient when saved.
    A cost is only read when ``costOverridden`` is set.
    """
    category = str(data.get('category') or '').strip()
    if category not in VALID_MENU_CATEGORIES:
        raise FormError(f'Invalid category: {category}')

    usages = []
    for entry in _list_field(data, 'ingredients'):
        ingredient_id = str(entry.get('id') or '').strip()
        if not ingredient_id:
            continue
        usages.append(RecipeIngredientUsage(
            id=ingredient_id,
            consumed_quantity=safe_float(entry.get('consumedQuantity'), default=0.0,
                                         max_val=MAX_QUANTITY),
        ))

    overridden = parse_bool(data.get('costOverridden', False), 'costOverridden')
    cost = 0.0
    if overridden:
        cost = safe_float(data.get('cost'), default=None, max_val=MAX_PRICE)
        if cost is None or cost < 0:
            raise FormError('cost must be a number when it is set manually')
        cost = round(cost, 2)

    return MenuItem(
        name=_required_name(data, 'name', MAX_LENGTHS['menu_name']),
        category=category,
        max_capacity=_positive_int(data, 'maxCapacity', MAX_BATCH_CAPACITY),
        baking_duration=_non_negative_float(data, 'bakingDuration', max_val=MAX_BAKING_DURATION),
        baked_quantity=_positive_int(data, 'bakedQuantity', MAX_QUANTITY),
        ingredients=usages,
        packaging_options=parse_packaging_options(_list_field(data, 'packagingOptions')),
        cost=cost,
        cost_overridden=overridden,
    )


def parse_order_lines(data):
    """Requested order lines from [{id, quantity, packagingValue}, ...]."""
    lines = []
    for entry in _list_field(data, 'items'):
        menu_item_id = str(entry.get('id') or '').strip()
        if not menu_item_id:
            continue
        lines.append(OrderLineItem(
            id=menu_item_id,
            quantity=_whole_number(entry, 'quantity', default=0, max_val=MAX_QUANTITY),
            packaging_value=_whole_number(entry, 'packagingValue', default=0),
        ))
    return lines


def parse_order_form(data):
    """
    Parse the order form.

    Returns:
        Tuple of (order_by, requested lines, discount, note)
    """
    order_by = _required_name(data, 'orderBy', MAX_LENGTHS['order_by'])
    lines = parse_order_lines(data)
    if not lines:
        raise FormError('At least one menu item is required')
    discount = _non_negative_float(data, 'discount')
    note = sanitize_note(data.get('note'), max_length=MAX_LENGTHS['note'])
    return order_by, lines, discount, note


def parse_status_form(data):
    """
    Parse an order status change.

    Returns:
        Tuple of (delivered, payment_received); a flag not submitted is None
    """
    delivered = data.get('isDelivered')
    paid = data.get('isPaymentReceived')
    if delivered is None and paid is None:
        raise FormError('isDelivered or isPaymentReceived is required')
    return (
        None if delivered is None else parse_bool(delivered, 'isDelivered'),
        None if paid is None else parse_bool(paid, 'isPaymentReceived'),
    )
