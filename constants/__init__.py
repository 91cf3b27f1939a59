"""
Constants Package

Unit tables, validation whitelists and costing defaults.
"""

from .units import INGREDIENT_UNITS, UNIT_MAPPINGS
from .validation import (
    VALID_MENU_CATEGORIES,
    MIN_PACKAGING_VALUE,
    MAX_PACKAGING_VALUE,
    MAX_PRICE,
    MAX_QUANTITY,
    MAX_BATCH_CAPACITY,
    MAX_BAKING_DURATION,
    MAX_LENGTHS,
    MIN_PASSWORD_LENGTH,
)
from .costing import (
    ELECTRICITY_COST_PER_HOUR,
    MONEY_PLACES,
    ORDER_ID_PREFIX,
    RECENT_ORDERS_LIMIT,
    INGREDIENTS,
    MENU,
    ORDERS,
    COLLECTIONS,
)

__all__ = [
    'INGREDIENT_UNITS',
    'UNIT_MAPPINGS',
    'VALID_MENU_CATEGORIES',
    'MIN_PACKAGING_VALUE',
    'MAX_PACKAGING_VALUE',
    'MAX_PRICE',
    'MAX_QUANTITY',
    'MAX_BATCH_CAPACITY',
    'MAX_BAKING_DURATION',
    'MAX_LENGTHS',
    'MIN_PASSWORD_LENGTH',
    'ELECTRICITY_COST_PER_HOUR',
    'MONEY_PLACES',
    'ORDER_ID_PREFIX',
    'RECENT_ORDERS_LIMIT',
    'INGREDIENTS',
    'MENU',
    'ORDERS',
    'COLLECTIONS',
]
