"""
Unit Constants

Measurement units accepted for ingredients and the aliases users
commonly type for them.
"""

# Units offered for an ingredient's purchase quantity (display order)
INGREDIENT_UNITS = [
    'grams',
    'kg',
    'ml',
    'liters',
    'tsp',
    'tbsp',
    'cup',
    'pcs',
    'dozen',
]

# Unit aliases (lowercase input -> standard unit)
UNIT_MAPPINGS = {
    'g': 'grams', 'gm': 'grams', 'gms': 'grams', 'gram': 'grams', 'grams': 'grams',
    'kg': 'kg', 'kgs': 'kg', 'kilogram': 'kg', 'kilograms': 'kg',
    'ml': 'ml', 'milliliter': 'ml', 'milliliters': 'ml', 'millilitre': 'ml', 'millilitres': 'ml',
    'l': 'liters', 'liter': 'liters', 'liters': 'liters', 'litre': 'liters', 'litres': 'liters',
    'tsp': 'tsp', 'teaspoon': 'tsp', 'teaspoons': 'tsp',
    'tbsp': 'tbsp', 'tablespoon': 'tbsp', 'tablespoons': 'tbsp',
    'cup': 'cup', 'cups': 'cup',
    'pc': 'pcs', 'pcs': 'pcs', 'piece': 'pcs', 'pieces': 'pcs',
    'dozen': 'dozen', 'dz': 'dozen',
}
