from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the dots and boxes game server!'})

@main.route('/health')
def health():
    registry = current_app.extensions['room_registry']
    binder = current_app.extensions['session_binder']
    return jsonify({'status': 'ok', 'rooms': len(registry), 'connections': len(binder)})
