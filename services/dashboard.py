"""
Dashboard Service

Summary statistics over a user's orders.
"""

from collections import namedtuple
from datetime import datetime, timezone

from constants import RECENT_ORDERS_LIMIT

from .costing import round_money

DashboardSummary = namedtuple(
    'DashboardSummary',
    'total_orders total_revenue pending_count unpaid_count '
    'total_making_cost total_electricity_cost total_packaging_cost '
    'pending_orders recent_orders',
)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _order_time(order):
    when = order.order_date
    if when is None:
        return _EPOCH
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when


def sort_newest_first(orders):
    return sorted(orders, key=_order_time, reverse=True)


def summarize_orders(orders, recent_limit=RECENT_ORDERS_LIMIT):
    """
    Build the dashboard summary.

    Revenue is the sum of each order's snapshotted total amount.
    Pending means not yet delivered; unpaid means payment not received.
    Both order lists are newest first.
    """
    ordered = sort_newest_first(orders)
    pending = [o for o in ordered if not o.is_delivered]

    return DashboardSummary(
        total_orders=len(ordered),
        total_revenue=round_money(sum(o.total_amount or 0.0 for o in ordered)),
        pending_count=len(pending),
        unpaid_count=sum(1 for o in ordered if not o.is_payment_received),
        total_making_cost=round_money(sum(o.total_making_cost for o in ordered)),
        total_electricity_cost=round_money(sum(o.total_electricity_cost for o in ordered)),
        total_packaging_cost=round_money(sum(o.total_packaging_cost for o in ordered)),
        pending_orders=pending,
        recent_orders=ordered[:recent_limit],
    )
