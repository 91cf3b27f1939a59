"""Tests for document schemas."""

from models import Ingredient, MenuItem, Order


def test_ingredient_reads_and_writes_camel_case():
    ingredient = Ingredient.from_document('flour', {
        'name': 'Flour', 'costPrice': 100, 'quantity': 1000, 'unit': 'grams',
    })

    assert ingredient.id == 'flour'
    assert ingredient.cost_price == 100.0
    assert ingredient.to_document() == {
        'name': 'Flour', 'costPrice': 100.0, 'quantity': 1000.0, 'unit': 'grams',
    }


def test_numbers_load_leniently():
    ingredient = Ingredient.model_validate({'name': 'Salt', 'costPrice': 'abc', 'quantity': None})
    assert ingredient.cost_price == 0.0
    assert ingredient.quantity == 0.0

    item = MenuItem.model_validate({'maxCapacity': '12', 'bakedQuantity': None, 'ingredients': None})
    assert item.max_capacity == 12
    assert item.baked_quantity == 0
    assert item.ingredients == []


def test_menu_item_from_older_document():
    item = MenuItem.from_document('m1', {
        'name': 'Brownies',
        'category': 'Brownies',
        'maxCapacity': 16,
        'bakingDuration': 25,
        'bakedQuantity': 16,
        'ingredients': [{'id': 'i1', 'name': 'Cocoa', 'unit': 'grams', 'consumedQuantity': 80}],
        'packagingOptions': [{'value': 4, 'mrp': 240}],
        'cost': 96.5,
    })

    assert item.cost_overridden is False
    assert item.packaging_options[0].packaging_cost == 0.0
    assert item.ingredients[0].consumed_quantity == 80.0


def test_menu_item_document_keeps_embedded_ids_and_order():
    item = MenuItem.model_validate({
        'name': 'Cake',
        'ingredients': [
            {'id': 'b', 'consumedQuantity': 2},
            {'id': 'a', 'consumedQuantity': 1},
        ],
        'packagingOptions': [{'value': 2, 'mrp': 20}, {'value': 1, 'mrp': 11}],
    })
    document = item.to_document()

    assert [i['id'] for i in document['ingredients']] == ['b', 'a']
    assert [p['value'] for p in document['packagingOptions']] == [2, 1]
    assert document['costOverridden'] is False


def test_order_from_earliest_document_shape():
    order = Order.from_document('o1', {
        'orderId': 'CT-1700000000000',
        'orderBy': 'Meera',
        'orderDate': '2023-11-14T22:13:20.000Z',
        'isDelivered': True,
        'items': [{'id': 'm1', 'name': 'Cake', 'quantity': 1, 'packagingValue': 1}],
        'totalAmount': 450,
    })

    assert order.is_payment_received is False
    assert order.note is None
    assert order.total_making_cost == 0.0
    assert order.order_date.year == 2023
    assert order.delivery_status == 'Delivered'
    assert order.payment_status == 'Unpaid'
