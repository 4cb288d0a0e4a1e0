from flask import Blueprint, current_app, jsonify

from wordroom.services.game.errors import RoomNotFound

rooms = Blueprint('rooms', __name__)

@rooms.route('/<string:code>', methods=['GET'])
def get_room_state(code):
    """
    Returns the public snapshot of a room. The secret word is never included.
    """
    try:
        state = current_app.extensions['wordroom'].snapshot(code)
    except RoomNotFound as exc:
        return jsonify({'error': exc.message, 'errorCode': exc.error_code}), 404
    return jsonify(state), 200
