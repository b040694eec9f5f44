from flask import Flask, request, jsonify
import logging

from config import Settings
from core.order_engine import OrderEngine
from models.menu import Location
from services.exceptions import AuthenticationError, InvalidStateError, PaymentFailedError


def error_response(message, status):
    return jsonify({'success': False, 'error': message}), status


def create_app(engine=None, settings=None):
    """Build the Flask app around one OrderEngine (one client session)"""
    settings = settings or Settings.from_env()
    engine = engine or OrderEngine(settings)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config['ORDER_ENGINE'] = engine

    @app.errorhandler(AuthenticationError)
    def handle_authentication_error(e):
        return error_response(str(e), 401)

    @app.errorhandler(InvalidStateError)
    def handle_invalid_state(e):
        return error_response(str(e), 409)

    @app.errorhandler(PaymentFailedError)
    def handle_payment_failed(e):
        return error_response(str(e), 402)

    @app.errorhandler(ValueError)
    def handle_bad_input(e):
        return error_response(f'Invalid request: {e}', 400)

    @app.errorhandler(KeyError)
    def handle_missing_field(e):
        return error_response(f'Missing field: {e.args[0]}', 400)

    @app.route('/health')
    def health():
        """Health check endpoint"""
        return jsonify({'status': 'ok', 'message': 'Order engine is running!'})

    # === Session ===
    @app.route('/api/session', methods=['POST'])
    def sign_in():
        data = request.get_json(silent=True) or {}
        user_id = (data.get('user_id') or '').strip()
        if not user_id:
            return error_response('user_id is required', 400)

        engine.identity.sign_in(user_id)
        return jsonify({'success': True, 'user_id': user_id})

    @app.route('/api/session', methods=['DELETE'])
    def sign_out():
        engine.identity.sign_out()
        return jsonify({'success': True})

    # === Catalog ===
    @app.route('/api/restaurants')
    def list_restaurants():
        restaurants = engine.list_restaurants()
        return jsonify({'restaurants': [r.to_dict() for r in restaurants]})

    @app.route('/api/restaurants/<restaurant_id>/menu')
    def restaurant_menu(restaurant_id):
        if engine.get_restaurant(restaurant_id) is None:
            return error_response('Restaurant not found', 404)
        return jsonify({'menu_items': [m.to_dict() for m in engine.get_menu(restaurant_id)]})

    @app.route('/api/menu/search')
    def search_menu():
        query = request.args.get('q', '').strip()
        if not query:
            return error_response('q is required', 400)
        return jsonify(engine.find_menu_items(query, request.args.get('restaurant_id')))

    # === Cart ===
    def cart_payload():
        return {
            'success': True,
            'cart_items': [item.to_dict() for item in engine.cart],
            'summary': engine.get_cart_summary().to_dict()
        }

    @app.route('/api/cart')
    def get_cart():
        return jsonify(cart_payload())

    @app.route('/api/cart', methods=['DELETE'])
    def clear_cart():
        engine.clear_cart()
        return jsonify(cart_payload())

    @app.route('/api/cart/items', methods=['POST'])
    def add_cart_item():
        data = request.get_json(silent=True) or {}
        cart_item = engine.add_menu_item_to_cart(
            data['menu_item_id'],
            int(data.get('quantity', 1)),
            data.get('selected_options'),
            data.get('special_instructions')
        )
        if cart_item is None:
            return error_response('Menu item not found', 404)

        payload = cart_payload()
        payload['cart_item'] = cart_item.to_dict()
        return jsonify(payload), 201

    @app.route('/api/cart/items/<cart_item_id>', methods=['PATCH'])
    def update_cart_item(cart_item_id):
        data = request.get_json(silent=True) or {}
        engine.update_cart_item_quantity(cart_item_id, int(data['quantity']))
        return jsonify(cart_payload())

    @app.route('/api/cart/items/<cart_item_id>', methods=['DELETE'])
    def remove_cart_item(cart_item_id):
        engine.remove_from_cart(cart_item_id)
        return jsonify(cart_payload())

    # === Orders ===
    @app.route('/api/orders', methods=['POST'])
    def create_order():
        data = request.get_json(silent=True) or {}
        tip = data.get('tip')

        order = engine.create_order(
            Location.from_dict(data['delivery_address']),
            data['payment_method'],
            data.get('delivery_instructions'),
            float(tip) if tip is not None else None,
            data.get('payment_method_id')
        )
        return jsonify({
            'success': True,
            'message': 'Order created successfully',
            'order': order.to_dict()
        }), 201

    @app.route('/api/orders')
    def list_orders():
        status = request.args.get('status', 'all')
        orders = engine.get_user_orders(None if status == 'all' else status)
        return jsonify({'orders': [order.to_dict() for order in orders]})

    @app.route('/api/orders/active')
    def active_order():
        order = engine.get_active_order()
        return jsonify({'order': order.to_dict() if order else None})

    @app.route('/api/orders/<order_id>')
    def order_detail(order_id):
        order = engine.get_order_by_id(order_id)
        if order is None:
            return error_response('Order not found', 404)
        return jsonify({'order': order.to_dict()})

    @app.route('/api/orders/<order_id>/cancel', methods=['POST'])
    def cancel_order(order_id):
        order = engine.cancel_order(order_id)
        if order is None:
            return error_response('Order not found', 404)
        return jsonify({'success': True, 'order': order.to_dict()})

    @app.route('/api/orders/<order_id>/location', methods=['PUT'])
    def update_location(order_id):
        data = request.get_json(silent=True) or {}
        order = engine.update_delivery_person_location(order_id, Location.from_dict(data))
        if order is None:
            return error_response('Order not found', 404)
        return jsonify({'success': True, 'order': order.to_dict()})

    # === Payment methods ===
    @app.route('/api/payment-methods')
    def list_payment_methods():
        return jsonify({'payment_methods': [m.to_dict() for m in engine.list_payment_methods()]})

    @app.route('/api/payment-methods', methods=['POST'])
    def add_payment_method():
        data = request.get_json(silent=True) or {}
        method = engine.add_payment_method(
            data['type'], data['name'], data.get('last4'), data.get('expiry_date')
        )
        return jsonify({'success': True, 'payment_method': method.to_dict()}), 201

    return app


if __name__ == '__main__':
    settings = Settings.from_env()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    app = create_app(settings=settings)

    print("=== Order Engine Server ===")
    print(f"Starting server on http://localhost:{settings.port}")
    print("Press Ctrl+C to stop")

    app.run(
        host='0.0.0.0',
        port=settings.port,
        debug=settings.debug
    )
