"""
Document Schemas

Each pydantic model describes one kind of document held in a user's
collections. Attributes are snake_case in Python and stored with the
camelCase field names the documents have always used (costPrice,
bakedQuantity, totalMRP, ...).

Numeric fields load leniently: a missing, null or non-numeric value
becomes 0 so the costing engine can degrade to a zero contribution
instead of failing on an old or hand-edited document.
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from utils.numbers import safe_float, safe_int


def _number(value):
    return safe_float(value, default=0.0)


def _count(value):
    return safe_int(value, default=0)


def _flag(value):
    return False if value is None else value


def _text(value):
    return '' if value is None else value


def _items(value):
    return value or []


Number = Annotated[float, BeforeValidator(_number)]
Count = Annotated[int, BeforeValidator(_count)]
Flag = Annotated[bool, BeforeValidator(_flag)]
Text = Annotated[str, BeforeValidator(_text)]


class DocumentSchema(BaseModel):
    """Base for stored documents and their embedded parts."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')

    def to_document(self):
        """Field dict as written to the store (the id lives outside the body)."""
        return self.model_dump(mode='json', by_alias=True, exclude={'id'})

    def to_dict(self):
        """Field dict including the id, for JSON responses."""
        return self.model_dump(mode='json', by_alias=True)

    @classmethod
    def from_document(cls, doc_id, data):
        return cls.model_validate({**(data or {}), 'id': doc_id})


class Ingredient(DocumentSchema):
    """Purchased ingredient: costPrice buys quantity units."""
    id: Optional[str] = None
    name: Text = ''
    cost_price: Number = 0.0
    quantity: Number = 0.0
    unit: Text = ''


class RecipeIngredientUsage(DocumentSchema):
    """Ingredient line of a recipe; id references an Ingredient."""
    id: Optional[str] = None
    name: Text = ''
    unit: Text = ''
    consumed_quantity: Number = 0.0

    def to_document(self):
        # Embedded lines keep their ingredient reference
        return self.model_dump(mode='json', by_alias=True)


class PackagingOption(DocumentSchema):
    """A pack size a menu item is sold in."""
    value: Count = 0
    mrp: Number = 0.0
    packaging_cost: Number = 0.0


class MenuItem(DocumentSchema):
    """
    Recipe and catalog entry.

    ``cost`` is the ingredient cost of one full ``baked_quantity`` run.
    It is recomputed from current ingredient prices on every save and
    reload unless ``cost_overridden`` is set, which freezes the value
    the user entered.
    """
    id: Optional[str] = None
    name: Text = ''
    category: Text = ''
    max_capacity: Count = 0
    baking_duration: Number = 0.0
    baked_quantity: Count = 0
    ingredients: Annotated[List[RecipeIngredientUsage], BeforeValidator(_items)] = Field(default_factory=list)
    packaging_options: Annotated[List[PackagingOption], BeforeValidator(_items)] = Field(default_factory=list)
    cost: Number = 0.0
    cost_overridden: Flag = False


class OrderLineItem(DocumentSchema):
    """Ordered packs of one menu item, with costs frozen at order creation."""
    id: Optional[str] = None
    name: Text = ''
    quantity: Count = 0
    packaging_value: Count = 0
    mrp: Number = 0.0
    making_cost: Number = 0.0
    electricity_cost: Number = 0.0
    packaging_cost: Number = 0.0

    def to_document(self):
        return self.model_dump(mode='json', by_alias=True)


class Order(DocumentSchema):
    """Customer order. Every amount is a snapshot taken when the order was created."""
    id: Optional[str] = None
    order_id: Text = ''
    order_by: Text = ''
    order_date: Optional[datetime] = None
    is_delivered: Flag = False
    is_payment_received: Flag = False
    note: Optional[str] = None
    items: Annotated[List[OrderLineItem], BeforeValidator(_items)] = Field(default_factory=list)
    total_mrp: Number = Field(default=0.0, alias='totalMRP')
    discount: Number = 0.0
    total_amount: Number = 0.0
    total_making_cost: Number = 0.0
    total_electricity_cost: Number = 0.0
    total_packaging_cost: Number = 0.0

    @property
    def delivery_status(self):
        return 'Delivered' if self.is_delivered else 'Pending'

    @property
    def payment_status(self):
        return 'Paid' if self.is_payment_received else 'Unpaid'
