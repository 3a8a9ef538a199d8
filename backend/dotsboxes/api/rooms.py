from flask import Blueprint, current_app, jsonify

rooms = Blueprint('rooms', __name__)


def _registry():
    return current_app.extensions['room_registry']


@rooms.route('', methods=['GET'])
@rooms.route('/', methods=['GET'])
def list_rooms():
    """
    Returns the live lobby listing, the same payload as the room_list event.
    """
    return jsonify(_registry().list_summaries())


@rooms.route('/<string:room_id>', methods=['GET'])
def get_room_state(room_id):
    """
    Returns the full snapshot of one room.
    """
    room = _registry().get(room_id)
    if room is None:
        return jsonify({'error': 'Room not found'}), 404
    with room.lock:
        if room.closed:
            return jsonify({'error': 'Room not found'}), 404
        state = room.to_dict()
    return jsonify(state)
