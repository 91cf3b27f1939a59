"""
Validation Constants

Contains whitelist values and bounds for validating user input
before it is written to the document store.
"""

# Valid menu item categories
VALID_MENU_CATEGORIES = [
    'Cake',
    'Brownies',
    'Cheesecake',
    'Cookies',
    'Button Cookies',
    'Savory',
    'Mukhwas',
    'Hampers',
    'Chocolates',
    'Cupcakes',
    'Other',
]

# Pack sizes a packaging option may offer (inclusive)
MIN_PACKAGING_VALUE = 1
MAX_PACKAGING_VALUE = 12

# Upper bounds for numeric form fields
MAX_PRICE = 9999999.99
MAX_QUANTITY = 9999999
MAX_BATCH_CAPACITY = 100000
MAX_BAKING_DURATION = 24 * 60

# Maximum field lengths
MAX_LENGTHS = {
    'ingredient_name': 200,
    'menu_name': 200,
    'order_by': 200,
    'note': 2000,
    'email': 254,
    'display_name': 100,
}

MIN_PASSWORD_LENGTH = 8
