"""
Services Package

Business logic modules for the bakery application.
"""

from .costing import (
    ingredient_unit_cost,
    recipe_ingredient_cost,
    recipe_cost,
    recipe_cost_breakdown,
    effective_menu_item_cost,
    total_batches,
    batch_electricity_cost,
    menu_item_display_cost,
    find_packaging_option,
    order_line_cost,
    price_order_line,
    order_totals,
)

from .orders import (
    make_order_id,
    price_order_lines,
    build_order,
)

from .dashboard import summarize_orders

from .store import DocumentStore

from .auth import AuthProvider, AuthError, RegistrationError

from .session import BakerySession, NotFoundError

from .forms import (
    FormError,
    parse_ingredient_form,
    parse_menu_form,
    parse_order_form,
    parse_order_lines,
    parse_status_form,
)

__all__ = [
    # Costing
    'ingredient_unit_cost',
    'recipe_ingredient_cost',
    'recipe_cost',
    'recipe_cost_breakdown',
    'effective_menu_item_cost',
    'total_batches',
    'batch_electricity_cost',
    'menu_item_display_cost',
    'find_packaging_option',
    'order_line_cost',
    'price_order_line',
    'order_totals',
    # Orders
    'make_order_id',
    'price_order_lines',
    'build_order',
    # Dashboard
    'summarize_orders',
    # Store, auth & session
    'DocumentStore',
    'AuthProvider',
    'AuthError',
    'RegistrationError',
    'BakerySession',
    'NotFoundError',
    # Forms
    'FormError',
    'parse_ingredient_form',
    'parse_menu_form',
    'parse_order_form',
    'parse_order_lines',
    'parse_status_form',
]
