from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the word room server!'})

@main.route('/health')
def health():
    machine = current_app.extensions['wordroom']
    return jsonify({'status': 'ok', 'rooms': len(machine.registry)})
