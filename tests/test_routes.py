"""End-to-end tests for the JSON routes."""

import pytest


def _add_ingredient(client, name, cost_price, quantity, unit='g'):
    response = client.post('/ingredient/add', json={
        'name': name, 'costPrice': cost_price, 'quantity': quantity, 'unit': unit,
    })
    assert response.status_code == 201
    return response.get_json()['ingredient']['id']


@pytest.fixture
def stocked_client(signed_in_client):
    """Signed-in client with flour, butter and a cookie recipe."""
    client = signed_in_client
    flour_id = _add_ingredient(client, 'Flour', 100, 1000)
    butter_id = _add_ingredient(client, 'Butter', 500, 500)

    response = client.post('/menu/add', json={
        'name': 'Choco Chip Cookies',
        'category': 'Cookies',
        'maxCapacity': 20,
        'bakingDuration': 30,
        'bakedQuantity': 60,
        'ingredients': [
            {'id': flour_id, 'consumedQuantity': 250},
            {'id': butter_id, 'consumedQuantity': 100},
            {'id': 'no-such-ingredient', 'consumedQuantity': 5},
        ],
        'packagingOptions': [
            {'value': 6, 'mrp': 300, 'packagingCost': 10},
            {'value': 12, 'mrp': 550, 'packagingCost': 15},
        ],
    })
    assert response.status_code == 201
    client.ids = {
        'flour': flour_id,
        'butter': butter_id,
        'cookies': response.get_json()['menuItem']['id'],
    }
    return client


def test_protected_routes_require_sign_in(client):
    for path in ('/', '/ingredients', '/menu', '/orders'):
        assert client.get(path).status_code == 401
    assert client.post('/order/add', json={}).status_code == 401


def test_sign_in_and_out(client):
    client.post('/auth/register', json={'email': 'a@example.com', 'password': 'long-enough'})

    assert client.post('/auth/signin', json={'email': 'a@example.com', 'password': 'nope-nope'}).status_code == 401
    assert client.get('/auth/me').get_json() == {'user': None}

    client.post('/auth/signin', json={'email': 'a@example.com', 'password': 'long-enough'})
    assert client.get('/auth/me').get_json()['user']['email'] == 'a@example.com'

    client.post('/auth/signout')
    assert client.get('/ingredients').status_code == 401


def test_register_rejects_duplicate_email(signed_in_client):
    response = signed_in_client.post('/auth/register', json={
        'email': 'baker@example.com', 'password': 'another-one',
    })
    assert response.status_code == 400
    assert 'already exists' in response.get_json()['error']


def test_ingredient_crud(signed_in_client):
    client = signed_in_client
    doc_id = _add_ingredient(client, 'Sugar', 45, 1, unit='kg')

    response = client.post(f'/ingredient/{doc_id}/edit', json={
        'name': 'Sugar', 'costPrice': 50, 'quantity': 1, 'unit': 'kg',
    })
    assert response.status_code == 200

    data = client.get('/ingredients').get_json()
    assert data['ingredients'] == [
        {'id': doc_id, 'name': 'Sugar', 'costPrice': 50.0, 'quantity': 1.0, 'unit': 'kg'},
    ]
    assert 'dozen' in data['units']

    assert client.post(f'/ingredient/{doc_id}/delete').status_code == 200
    assert client.get('/ingredients').get_json()['ingredients'] == []
    assert client.post(f'/ingredient/{doc_id}/delete').status_code == 404


def test_ingredient_name_survives_repeated_edits(signed_in_client):
    client = signed_in_client
    doc_id = _add_ingredient(client, 'Salt & Pepper', 20, 100)

    for _ in range(2):
        stored = client.get('/ingredients').get_json()['ingredients'][0]
        response = client.post(f'/ingredient/{doc_id}/edit', json=stored)
        assert response.status_code == 200

    stored = client.get('/ingredients').get_json()['ingredients'][0]
    assert stored['name'] == 'Salt & Pepper'


def test_menu_name_survives_repeated_edits(stocked_client):
    client = stocked_client
    doc_id = client.ids['cookies']

    for _ in range(2):
        stored = client.get(f'/menu/{doc_id}').get_json()['menuItem']
        stored['name'] = 'Choc & Chip <Cookies>'
        response = client.post(f'/menu/{doc_id}/edit', json=stored)
        assert response.status_code == 200

    assert client.get(f'/menu/{doc_id}').get_json()['menuItem']['name'] == 'Choc & Chip <Cookies>'


def test_ingredient_rejects_oversized_number(signed_in_client):
    response = signed_in_client.post('/ingredient/add', json={
        'name': 'Saffron', 'costPrice': 10 ** 400, 'quantity': 1, 'unit': 'g',
    })
    assert response.status_code == 400


def test_order_rejects_fractional_quantity(stocked_client):
    response = stocked_client.post('/order/add', json={
        'orderBy': 'Ravi',
        'items': [{'id': stocked_client.ids['cookies'], 'quantity': 2.9, 'packagingValue': 6}],
    })
    assert response.status_code == 400
    assert 'whole number' in response.get_json()['error']


def test_ingredient_validation_error(signed_in_client):
    response = signed_in_client.post('/ingredient/add', json={
        'name': 'Sugar', 'costPrice': 45, 'quantity': 0, 'unit': 'kg',
    })
    assert response.status_code == 400
    assert 'quantity' in response.get_json()['error']


def test_edit_missing_ingredient(signed_in_client):
    response = signed_in_client.post('/ingredient/missing/edit', json={
        'name': 'Sugar', 'costPrice': 45, 'quantity': 1, 'unit': 'kg',
    })
    assert response.status_code == 404


def test_menu_costs(stocked_client):
    client = stocked_client
    menu = client.get('/menu').get_json()
    item = menu['menu'][0]

    assert item['cost'] == 125.0
    assert item['electricityCost'] == 36.0
    assert item['totalCost'] == 161.0
    assert item['costPerUnit'] == 2.68
    assert [i['name'] for i in item['ingredients']] == ['Flour', 'Butter']
    assert 'Cupcakes' in menu['categories']
    assert menu['packagingValues'] == list(range(1, 13))


def test_menu_details_follow_ingredient_prices(stocked_client):
    client = stocked_client
    ids = client.ids
    client.post(f'/ingredient/{ids["flour"]}/edit', json={
        'name': 'Flour', 'costPrice': 200, 'quantity': 1000, 'unit': 'grams',
    })
    client.post(f'/ingredient/{ids["butter"]}/delete')

    item = client.get(f'/menu/{ids["cookies"]}').get_json()['menuItem']

    assert item['cost'] == 50.0
    assert [(i['cost'], i['status']) for i in item['ingredients']] == [
        (50.0, 'ok'), (0.0, 'missing_reference'),
    ]


def test_menu_cost_override(stocked_client):
    client = stocked_client
    response = client.post(f'/menu/{client.ids["cookies"]}/edit', json={
        'name': 'Choco Chip Cookies',
        'category': 'Cookies',
        'maxCapacity': 20,
        'bakingDuration': 30,
        'bakedQuantity': 60,
        'ingredients': [{'id': client.ids['flour'], 'consumedQuantity': 250}],
        'packagingOptions': [{'value': 6, 'mrp': 300}],
        'costOverridden': True,
        'cost': 140,
    })
    assert response.status_code == 200
    assert response.get_json()['menuItem']['cost'] == 140.0

    client.post(f'/ingredient/{client.ids["flour"]}/edit', json={
        'name': 'Flour', 'costPrice': 300, 'quantity': 1000, 'unit': 'grams',
    })
    assert client.get('/menu').get_json()['menu'][0]['cost'] == 140.0


def test_order_quote(stocked_client):
    client = stocked_client
    response = client.post('/order/quote', json={'items': [
        {'id': client.ids['cookies'], 'quantity': 2, 'packagingValue': 6},
        {'id': client.ids['cookies'], 'quantity': 1, 'packagingValue': 5},
    ]})
    data = response.get_json()

    assert data['totalMRP'] == 600.0
    assert [i['status'] for i in data['items']] == ['ok', 'missing_packaging']


def test_order_lifecycle(stocked_client):
    client = stocked_client
    response = client.post('/order/add', json={
        'orderBy': 'Asha',
        'items': [
            {'id': client.ids['cookies'], 'quantity': 2, 'packagingValue': 6},
            {'id': 'deleted-item', 'quantity': 1, 'packagingValue': 6},
        ],
        'discount': 50,
        'note': 'Ring the bell',
    })
    assert response.status_code == 201
    data = response.get_json()
    order = data['order']

    assert order['orderId'].startswith('CT-')
    assert order['totalMRP'] == 600.0
    assert order['totalAmount'] == 550.0
    assert order['totalMakingCost'] == 25.0
    assert order['totalElectricityCost'] == 12.0
    assert order['totalPackagingCost'] == 20.0
    assert order['deliveryStatus'] == 'Pending'
    assert [s['status'] for s in data['skipped']] == ['missing_reference']

    doc_id = order['id']
    dashboard = client.get('/').get_json()
    assert dashboard['totalOrders'] == 1
    assert dashboard['totalRevenue'] == 550.0
    assert dashboard['pendingCount'] == 1
    assert dashboard['unpaidCount'] == 1

    response = client.post(f'/order/{doc_id}/status', json={'isDelivered': True})
    assert response.get_json()['order']['isDelivered'] is True
    client.post(f'/order/{doc_id}/status', json={'isPaymentReceived': True})

    dashboard = client.get('/').get_json()
    assert dashboard['pendingCount'] == 0
    assert dashboard['unpaidCount'] == 0
    assert dashboard['recentOrders'][0]['paymentStatus'] == 'Paid'

    # Later price changes do not touch the stored order
    client.post(f'/ingredient/{client.ids["flour"]}/edit', json={
        'name': 'Flour', 'costPrice': 1000, 'quantity': 1000, 'unit': 'grams',
    })
    stored = client.get(f'/order/{doc_id}').get_json()['order']
    assert stored['totalMakingCost'] == 25.0
    assert stored['items'][0]['makingCost'] == 25.0

    assert client.post(f'/order/{doc_id}/delete').status_code == 200
    assert client.get(f'/order/{doc_id}').status_code == 404
    assert client.get('/orders').get_json()['orders'] == []


def test_order_with_discount_above_mrp(stocked_client):
    client = stocked_client
    response = client.post('/order/add', json={
        'orderBy': 'Ravi',
        'items': [{'id': client.ids['cookies'], 'quantity': 1, 'packagingValue': 6}],
        'discount': 500,
    })
    assert response.get_json()['order']['totalAmount'] == -200.0


def test_status_requires_a_flag(stocked_client):
    response = stocked_client.post('/order/whatever/status', json={})
    assert response.status_code == 400


def test_users_do_not_see_each_other(stocked_client, app):
    other = app.test_client()
    other.post('/auth/register', json={'email': 'other@example.com', 'password': 'long-enough'})
    other.post('/auth/signin', json={'email': 'other@example.com', 'password': 'long-enough'})

    assert other.get('/ingredients').get_json()['ingredients'] == []
    assert other.get(f'/menu/{stocked_client.ids["cookies"]}').status_code == 404
