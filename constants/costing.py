"""
Costing Constants

Defaults used by the costing engine and the order builder.
"""

# Electricity tariff for the oven, in currency per hour
ELECTRICITY_COST_PER_HOUR = 24

# Monetary values are persisted with this many decimal places
MONEY_PLACES = 2

# Human-readable order ids look like CT-1700000000000
ORDER_ID_PREFIX = 'CT'

# Number of orders shown in the dashboard's recent list
RECENT_ORDERS_LIMIT = 10

# Document store collections
INGREDIENTS = 'ingredients'
MENU = 'menu'
ORDERS = 'orders'
COLLECTIONS = (INGREDIENTS, MENU, ORDERS)
