import logging
import sqlite3
from functools import wraps

from flask import Blueprint, Flask, current_app, g, jsonify, request
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine

from config import get_config
from constants import INGREDIENT_UNITS, VALID_MENU_CATEGORIES, MIN_PACKAGING_VALUE, MAX_PACKAGING_VALUE
from models import db
from services.auth import AuthProvider, AuthError, RegistrationError
from services.costing import LINE_OK, menu_item_display_cost, round_money
from services.forms import (
    FormError,
    parse_ingredient_form,
    parse_menu_form,
    parse_order_form,
    parse_order_lines,
    parse_status_form,
)
from services.session import BakerySession, NotFoundError

logger = logging.getLogger(__name__)

bp = Blueprint('bakery', __name__)
migrate = Migrate()


# Enable SQLite foreign key enforcement
@event.listens_for(Engine, 'connect')
def set_sqlite_pragma(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def _log_auth_state(user):
    if user is None:
        logger.debug('Auth state: signed out')
    else:
        logger.debug('Auth state: %s signed in', user.uid)


def create_app(env=None):
    app = Flask(__name__)
    app.config.from_object(get_config(env))

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    db.init_app(app)
    migrate.init_app(app, db)

    auth = AuthProvider()
    auth.on_state_change(_log_auth_state)
    app.extensions['bakery_auth'] = auth

    app.register_blueprint(bp)
    return app


def get_auth():
    return current_app.extensions['bakery_auth']


def _request_data():
    """Submitted fields from a JSON body or a plain form post."""
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise FormError('Request body must be a JSON object')
        return data
    return request.form.to_dict()


def login_required(view):
    """Require a signed-in user and load their session into g.bakery."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        user = get_auth().current_user()
        if user is None:
            return jsonify(error='Sign in required'), 401
        g.user = user
        g.bakery = BakerySession.for_user(
            user, electricity_rate=current_app.config['ELECTRICITY_COST_PER_HOUR']
        ).reload()
        return view(*args, **kwargs)
    return wrapped


@bp.errorhandler(FormError)
def handle_form_error(error):
    return jsonify(error=str(error)), 400


@bp.errorhandler(AuthError)
def handle_auth_error(error):
    return jsonify(error=str(error)), 401


@bp.errorhandler(RegistrationError)
def handle_registration_error(error):
    return jsonify(error=str(error)), 400


@bp.errorhandler(NotFoundError)
def handle_not_found(error):
    return jsonify(error=str(error)), 404


# ============================================
# SERIALIZATION
# ============================================

def menu_item_json(item, rate):
    display = menu_item_display_cost(item, rate)
    data = item.to_dict()
    data['electricityCost'] = round_money(display.electricity_cost)
    data['totalCost'] = round_money(display.total)
    data['costPerUnit'] = round_money(display.per_unit)
    return data


def recipe_line_json(line):
    data = line.usage.to_dict()
    data['cost'] = round_money(line.cost)
    data['status'] = line.status
    return data


def priced_line_json(line):
    data = line.request.to_dict()
    data['status'] = line.status
    data['mrp'] = round_money(line.mrp)
    if line.menu_item is not None:
        data['name'] = line.menu_item.name
    if line.costs is not None:
        data['makingCost'] = round_money(line.costs.making_cost)
        data['electricityCost'] = round_money(line.costs.electricity_cost)
        data['packagingCost'] = round_money(line.costs.packaging_cost)
    return data


def order_json(order):
    data = order.to_dict()
    data['deliveryStatus'] = order.delivery_status
    data['paymentStatus'] = order.payment_status
    return data


# ============================================
# ROUTES - AUTH
# ============================================

@bp.route('/auth/register', methods=['POST'])
def register():
    data = _request_data()
    user = get_auth().register(data.get('email'), data.get('password'), data.get('displayName', ''))
    return jsonify(user=user.to_dict()), 201


@bp.route('/auth/signin', methods=['POST'])
def sign_in():
    data = _request_data()
    user = get_auth().sign_in(data.get('email'), data.get('password'))
    return jsonify(user=user.to_dict())


@bp.route('/auth/signout', methods=['POST'])
def sign_out():
    get_auth().sign_out()
    return jsonify(user=None)


@bp.route('/auth/me')
def current_user():
    user = get_auth().current_user()
    return jsonify(user=user.to_dict() if user else None)


# ============================================
# ROUTES - DASHBOARD
# ============================================

@bp.route('/')
@login_required
def dashboard():
    summary = g.bakery.dashboard()
    return jsonify(
        totalOrders=summary.total_orders,
        totalRevenue=summary.total_revenue,
        pendingCount=summary.pending_count,
        unpaidCount=summary.unpaid_count,
        totalMakingCost=summary.total_making_cost,
        totalElectricityCost=summary.total_electricity_cost,
        totalPackagingCost=summary.total_packaging_cost,
        pendingOrders=[order_json(o) for o in summary.pending_orders],
        recentOrders=[order_json(o) for o in summary.recent_orders],
    )


# ============================================
# ROUTES - INGREDIENTS
# ============================================

@bp.route('/ingredients')
@login_required
def ingredients_list():
    return jsonify(
        ingredients=[i.to_dict() for i in g.bakery.ingredients],
        units=INGREDIENT_UNITS,
    )


@bp.route('/ingredient/add', methods=['POST'])
def ingredient_add():
    return _save_ingredient(None)


@bp.route('/ingredient/<doc_id>/edit', methods=['POST'])
def ingredient_edit(doc_id):
    return _save_ingredient(doc_id)


@login_required
def _save_ingredient(doc_id):
    ingredient = parse_ingredient_form(_request_data())
    new_id = g.bakery.save_ingredient(ingredient, doc_id=doc_id)
    saved = ingredient.model_copy(update={'id': new_id})
    return jsonify(ingredient=saved.to_dict()), 200 if doc_id else 201


@bp.route('/ingredient/<doc_id>/delete', methods=['POST'])
@login_required
def ingredient_delete(doc_id):
    g.bakery.delete_ingredient(doc_id)
    return jsonify(deleted=doc_id)


# ============================================
# ROUTES - MENU
# ============================================

@bp.route('/menu')
@login_required
def menu_list():
    rate = g.bakery.electricity_rate
    return jsonify(
        menu=[menu_item_json(m, rate) for m in g.bakery.menu],
        categories=VALID_MENU_CATEGORIES,
        packagingValues=list(range(MIN_PACKAGING_VALUE, MAX_PACKAGING_VALUE + 1)),
    )


@bp.route('/menu/<doc_id>')
@login_required
def menu_view(doc_id):
    item = g.bakery.get_menu_item(doc_id)
    display, breakdown = g.bakery.menu_item_details(item)
    data = item.to_dict()
    data['cost'] = round_money(display.recipe_cost)
    data['electricityCost'] = round_money(display.electricity_cost)
    data['totalCost'] = round_money(display.total)
    data['costPerUnit'] = round_money(display.per_unit)
    data['ingredients'] = [recipe_line_json(line) for line in breakdown]
    return jsonify(menuItem=data)


@bp.route('/menu/add', methods=['POST'])
def menu_add():
    return _save_menu_item(None)


@bp.route('/menu/<doc_id>/edit', methods=['POST'])
def menu_edit(doc_id):
    return _save_menu_item(doc_id)


@login_required
def _save_menu_item(doc_id):
    menu_item = parse_menu_form(_request_data())
    new_id, saved = g.bakery.save_menu_item(menu_item, doc_id=doc_id)
    return jsonify(menuItem=menu_item_json(saved, g.bakery.electricity_rate)), 200 if doc_id else 201


@bp.route('/menu/<doc_id>/delete', methods=['POST'])
@login_required
def menu_delete(doc_id):
    g.bakery.delete_menu_item(doc_id)
    return jsonify(deleted=doc_id)


# ============================================
# ROUTES - ORDERS
# ============================================

@bp.route('/orders')
@login_required
def orders_list():
    return jsonify(orders=[order_json(o) for o in g.bakery.orders])


@bp.route('/order/<doc_id>')
@login_required
def order_view(doc_id):
    return jsonify(order=order_json(g.bakery.get_order(doc_id)))


@bp.route('/order/quote', methods=['POST'])
@login_required
def order_quote():
    lines = g.bakery.quote_order(parse_order_lines(_request_data()))
    total = sum(line.mrp for line in lines if line.status == LINE_OK)
    return jsonify(items=[priced_line_json(line) for line in lines], totalMRP=round_money(total))


@bp.route('/order/add', methods=['POST'])
@login_required
def order_add():
    order_by, lines, discount, note = parse_order_form(_request_data())
    doc_id, order, skipped = g.bakery.create_order(order_by, lines, discount=discount, note=note)
    return jsonify(
        order=order_json(order),
        skipped=[priced_line_json(line) for line in skipped],
    ), 201


@bp.route('/order/<doc_id>/status', methods=['POST'])
@login_required
def order_status(doc_id):
    delivered, paid = parse_status_form(_request_data())
    order = g.bakery.set_order_status(doc_id, delivered=delivered, payment_received=paid)
    return jsonify(order=order_json(order))


@bp.route('/order/<doc_id>/delete', methods=['POST'])
@login_required
def order_delete(doc_id):
    g.bakery.delete_order(doc_id)
    return jsonify(deleted=doc_id)


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db(app):
    with app.app_context():
        db.create_all()


if __name__ == '__main__':
    app = create_app()
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
