"""
Bakery Session Service

Per-user application context: owns the read caches of ingredients,
menu items and orders, and performs every write through the document
store. Caches are replaced wholesale on each reload, never merged.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from constants import ELECTRICITY_COST_PER_HOUR, INGREDIENTS, MENU, ORDERS
from models.schemas import Ingredient, MenuItem, Order, RecipeIngredientUsage

from .costing import (
    LINE_OK,
    effective_menu_item_cost,
    menu_item_display_cost,
    recipe_cost_breakdown,
    round_money,
)
from .dashboard import sort_newest_first, summarize_orders
from .orders import build_order, price_order_lines
from .store import DocumentStore

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """Raised when a document referenced by id does not exist."""


class BakerySession:
    """Caches and operations for one signed-in user."""

    def __init__(self, store, electricity_rate=ELECTRICITY_COST_PER_HOUR):
        self.store = store
        self.electricity_rate = electricity_rate
        self.ingredients = []
        self.menu = []
        self.orders = []

    @classmethod
    def for_user(cls, user, electricity_rate=ELECTRICITY_COST_PER_HOUR):
        return cls(DocumentStore(user.uid), electricity_rate=electricity_rate)

    # =========== CACHES ===========

    def _load(self, collection, schema, current):
        try:
            records = self.store.list_all(collection)
        except SQLAlchemyError:
            logger.exception('Reload of %s failed; keeping %d cached records', collection, len(current))
            return current
        return [schema.model_validate(record) for record in records]

    def reload_ingredients(self):
        self.ingredients = self._load(INGREDIENTS, Ingredient, self.ingredients)
        return self.ingredients

    def reload_menu(self):
        """Reload menu items, refreshing each non-overridden cost from current ingredient prices."""
        if not self.ingredients:
            self.reload_ingredients()
        menu = self._load(MENU, MenuItem, self.menu)
        by_id = self.ingredients_by_id()
        self.menu = [m.model_copy(update={'cost': effective_menu_item_cost(m, by_id)}) for m in menu]
        return self.menu

    def reload_orders(self):
        self.orders = sort_newest_first(self._load(ORDERS, Order, self.orders))
        return self.orders

    def reload(self):
        self.reload_ingredients()
        self.reload_menu()
        self.reload_orders()
        return self

    def ingredients_by_id(self):
        return {i.id: i for i in self.ingredients}

    def menu_by_id(self):
        return {m.id: m for m in self.menu}

    def _require(self, collection, schema, doc_id):
        record = self.store.get(collection, doc_id)
        if record is None:
            raise NotFoundError(f'{collection}/{doc_id} not found')
        return schema.model_validate(record)

    # =========== INGREDIENTS ===========

    def get_ingredient(self, doc_id):
        return self._require(INGREDIENTS, Ingredient, doc_id)

    def save_ingredient(self, ingredient, doc_id=None):
        """Create or fully overwrite an ingredient."""
        if doc_id is not None:
            self.get_ingredient(doc_id)
        doc_id = self.store.put(INGREDIENTS, doc_id, ingredient.to_document())
        self.reload_ingredients()
        return doc_id

    def delete_ingredient(self, doc_id):
        if not self.store.delete(INGREDIENTS, doc_id):
            raise NotFoundError(f'{INGREDIENTS}/{doc_id} not found')
        self.reload_ingredients()

    # =========== MENU ===========

    def get_menu_item(self, doc_id):
        return self._require(MENU, MenuItem, doc_id)

    def prepare_menu_item(self, menu_item):
        """
        Resolve a submitted menu item against the current ingredients.

        Recipe lines whose ingredient is gone or whose quantity is not
        positive are dropped; kept lines get the ingredient's current
        name and unit. The cost is recomputed unless overridden.
        """
        by_id = self.ingredients_by_id()
        usages = []
        for line in recipe_cost_breakdown(menu_item, by_id):
            if line.status != LINE_OK:
                logger.info('Dropping recipe line %s from "%s": %s',
                            line.usage.id, menu_item.name, line.status)
                continue
            usages.append(RecipeIngredientUsage(
                id=line.ingredient.id,
                name=line.ingredient.name,
                unit=line.ingredient.unit,
                consumed_quantity=line.usage.consumed_quantity,
            ))

        prepared = menu_item.model_copy(update={'ingredients': usages})
        if not prepared.cost_overridden:
            prepared = prepared.model_copy(
                update={'cost': round_money(effective_menu_item_cost(prepared, by_id))})
        return prepared

    def save_menu_item(self, menu_item, doc_id=None):
        """Create or fully overwrite a menu item. Returns (doc_id, stored item)."""
        if doc_id is not None:
            self.get_menu_item(doc_id)
        if not self.ingredients:
            self.reload_ingredients()
        prepared = self.prepare_menu_item(menu_item)
        doc_id = self.store.put(MENU, doc_id, prepared.to_document())
        self.reload_menu()
        return doc_id, prepared.model_copy(update={'id': doc_id})

    def delete_menu_item(self, doc_id):
        if not self.store.delete(MENU, doc_id):
            raise NotFoundError(f'{MENU}/{doc_id} not found')
        self.reload_menu()

    def menu_item_details(self, menu_item):
        """Display cost and per-line recipe breakdown of a menu item."""
        by_id = self.ingredients_by_id()
        live = menu_item.model_copy(update={'cost': effective_menu_item_cost(menu_item, by_id)})
        return (menu_item_display_cost(live, self.electricity_rate),
                recipe_cost_breakdown(menu_item, by_id))

    # =========== ORDERS ===========

    def get_order(self, doc_id):
        return self._require(ORDERS, Order, doc_id)

    def quote_order(self, requested_lines):
        """Live MRP of requested lines, before an order is created."""
        if not self.menu:
            self.reload()
        return price_order_lines(requested_lines, self.menu_by_id(), self.electricity_rate)

    def create_order(self, order_by, requested_lines, discount=0.0, note=None, now=None):
        """Build, snapshot and store a new order. Returns (doc_id, order, skipped lines)."""
        if not self.menu:
            self.reload()
        order, skipped = build_order(order_by, requested_lines, discount, self.menu_by_id(),
                                     self.electricity_rate, note=note, now=now)
        doc_id = self.store.put(ORDERS, None, order.to_document())
        logger.info('Created order %s (%s) for "%s": %.2f',
                    order.order_id, doc_id, order.order_by, order.total_amount)
        self.reload_orders()
        return doc_id, order.model_copy(update={'id': doc_id}), skipped

    def set_order_status(self, doc_id, delivered=None, payment_received=None):
        """Set either status flag; each is independent and reversible."""
        self.get_order(doc_id)
        fields = {}
        if delivered is not None:
            fields['isDelivered'] = bool(delivered)
        if payment_received is not None:
            fields['isPaymentReceived'] = bool(payment_received)
        if fields:
            self.store.put(ORDERS, doc_id, fields, merge=True)
            self.reload_orders()
        return self.get_order(doc_id)

    def delete_order(self, doc_id):
        if not self.store.delete(ORDERS, doc_id):
            raise NotFoundError(f'{ORDERS}/{doc_id} not found')
        self.reload_orders()

    def dashboard(self):
        return summarize_orders(self.reload_orders())
