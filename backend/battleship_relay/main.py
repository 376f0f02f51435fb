import os

from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    static_folder = current_app.static_folder
    if static_folder and os.path.isfile(os.path.join(static_folder, 'index.html')):
        return current_app.send_static_file('index.html')
    return jsonify({'message': 'Welcome to the battleship relay server!'})


@main.route('/api/slots', methods=['GET'])
def get_slots():
    """
    Returns the connection and readiness state of both player slots.
    """
    registry = current_app.extensions['match_relay'].registry
    return jsonify({
        'slots': [view.to_dict() for view in registry.snapshot()],
        'occupied': registry.occupied(),
    }), 200


@main.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'}), 200
