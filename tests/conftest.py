"""Pytest configuration and fixtures."""

import pytest

from app import create_app, init_db
from models import (
    db,
    Ingredient,
    MenuItem,
    PackagingOption,
    RecipeIngredientUsage,
)


@pytest.fixture
def app():
    """Flask app on a fresh in-memory database."""
    app = create_app('testing')
    init_db(app)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def signed_in_client(client):
    """Test client with a registered, signed-in user."""
    client.post('/auth/register', json={
        'email': 'baker@example.com',
        'password': 'correct-horse',
        'displayName': 'Baker',
    })
    response = client.post('/auth/signin', json={
        'email': 'baker@example.com',
        'password': 'correct-horse',
    })
    assert response.status_code == 200
    return client


@pytest.fixture
def flour():
    """100 for 1000 grams: 0.10 per gram."""
    return Ingredient(id='flour', name='Flour', cost_price=100, quantity=1000, unit='grams')


@pytest.fixture
def butter():
    """500 for 500 grams: 1.00 per gram."""
    return Ingredient(id='butter', name='Butter', cost_price=500, quantity=500, unit='grams')


@pytest.fixture
def ingredients_by_id(flour, butter):
    return {flour.id: flour, butter.id: butter}


@pytest.fixture
def cookies():
    """Recipe costing 125.00 for 60 cookies, baked 20 at a time for 30 minutes."""
    return MenuItem(
        id='cookies',
        name='Choco Chip Cookies',
        category='Cookies',
        max_capacity=20,
        baking_duration=30,
        baked_quantity=60,
        ingredients=[
            RecipeIngredientUsage(id='flour', name='Flour', unit='grams', consumed_quantity=250),
            RecipeIngredientUsage(id='butter', name='Butter', unit='grams', consumed_quantity=100),
        ],
        packaging_options=[
            PackagingOption(value=6, mrp=300, packaging_cost=10),
            PackagingOption(value=12, mrp=550, packaging_cost=15),
        ],
        cost=125.0,
    )


@pytest.fixture
def menu_by_id(cookies):
    return {cookies.id: cookies}
