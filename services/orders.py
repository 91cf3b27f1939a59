"""
Order Builder Service

Turns requested order lines into an Order document whose line and
total costs are snapshots: they are computed once here and never
recomputed from later menu or ingredient changes.
"""

import logging
from datetime import datetime, timezone

from constants import ORDER_ID_PREFIX
from models.schemas import Order, OrderLineItem

from .costing import LINE_OK, order_totals, price_order_line, round_money

logger = logging.getLogger(__name__)


def make_order_id(now):
    """Human-readable order id from the creation time (epoch milliseconds)."""
    return f'{ORDER_ID_PREFIX}-{int(now.timestamp() * 1000)}'


def price_order_lines(requested_lines, menu_by_id, rate_per_hour):
    """Price every requested line, keeping unresolved ones with their status."""
    return [price_order_line(line, menu_by_id, rate_per_hour) for line in requested_lines]


def snapshot_line(priced):
    """OrderLineItem with the menu item's name and rounded cost snapshot."""
    return OrderLineItem(
        id=priced.menu_item.id,
        name=priced.menu_item.name,
        quantity=priced.request.quantity,
        packaging_value=priced.request.packaging_value,
        mrp=round_money(priced.mrp),
        making_cost=round_money(priced.costs.making_cost),
        electricity_cost=round_money(priced.costs.electricity_cost),
        packaging_cost=round_money(priced.costs.packaging_cost),
    )


def build_order(order_by, requested_lines, discount, menu_by_id, rate_per_hour,
                note=None, now=None):
    """
    Build a new Order from requested lines.

    Lines whose menu item no longer exists, whose quantity or pack size
    is not positive, or whose pack size is not offered by the menu item
    are skipped.

    Args:
        order_by: Customer name
        requested_lines: OrderLineItem requests (id, quantity, packaging_value)
        discount: Order-level discount, subtracted from the total MRP
        menu_by_id: Current menu items keyed by id
        rate_per_hour: Electricity tariff used for the electricity snapshot
        note: Optional free-text note
        now: Creation time (defaults to the current UTC time)

    Returns:
        Tuple of (Order, list of PricedLine for the skipped lines)
    """
    if now is None:
        now = datetime.now(timezone.utc)

    priced_lines = price_order_lines(requested_lines, menu_by_id, rate_per_hour)
    accepted = [p for p in priced_lines if p.status == LINE_OK]
    skipped = [p for p in priced_lines if p.status != LINE_OK]

    for p in skipped:
        logger.warning('Skipping order line for menu item %s: %s', p.request.id, p.status)

    totals = order_totals(accepted, discount)

    order = Order(
        order_id=make_order_id(now),
        order_by=order_by,
        order_date=now,
        is_delivered=False,
        is_payment_received=False,
        note=note,
        items=[snapshot_line(p) for p in accepted],
        total_mrp=totals.total_mrp,
        discount=totals.discount,
        total_amount=totals.total_amount,
        total_making_cost=totals.total_making_cost,
        total_electricity_cost=totals.total_electricity_cost,
        total_packaging_cost=totals.total_packaging_cost,
    )
    return order, skipped
