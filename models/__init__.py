"""
Models Package

Exports the database models, the db instance and the document
schemas for use throughout the application.
"""

from .base import db

from .user import User
from .document import Document
from .schemas import (
    Ingredient,
    RecipeIngredientUsage,
    PackagingOption,
    MenuItem,
    OrderLineItem,
    Order,
)

__all__ = [
    'db',
    'User',
    'Document',
    'Ingredient',
    'RecipeIngredientUsage',
    'PackagingOption',
    'MenuItem',
    'OrderLineItem',
    'Order',
]
