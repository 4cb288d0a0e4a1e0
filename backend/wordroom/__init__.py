from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config['CORS_ALLOWED_ORIGINS']
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry and state machine per app; handlers reach it through app.extensions
    from wordroom.services.game import RoomCodeGenerator, RoomRegistry, RoomStateMachine, WordSource
    from wordroom.socketio_events import SocketIOTransport, register_socketio_handlers

    namespace = flask_app.config['SOCKETIO_NAMESPACE']
    if flask_app.config.get('WORD_LIST'):
        word_source = WordSource(flask_app.config['WORD_LIST'])
    else:
        word_source = WordSource.from_file(flask_app.config.get('WORDS_FILE'))
    registry = RoomRegistry(RoomCodeGenerator(length=flask_app.config['ROOM_CODE_LENGTH']))
    flask_app.extensions['wordroom'] = RoomStateMachine(
        registry,
        word_source,
        SocketIOTransport(socketio, namespace=namespace),
        default_host_name=flask_app.config['DEFAULT_HOST_NAME'],
        default_player_name=flask_app.config['DEFAULT_PLAYER_NAME'],
    )

    # Import and register blueprints here
    from wordroom.main import main
    flask_app.register_blueprint(main)

    from wordroom.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers
    register_socketio_handlers(namespace=namespace)

    @click.command('check-words')
    @click.option('--file', 'path', default=None, help='Word list to check instead of the configured one.')
    def check_words_command(path):
        """Loads the word list and reports usable and rejected entries."""
        from wordroom.services.game.words import DEFAULT_WORDS_FILE, parse_words
        path = path or flask_app.config.get('WORDS_FILE') or DEFAULT_WORDS_FILE
        with open(path, encoding='utf-8') as fh:
            words, rejected = parse_words(fh)
        for entry in rejected:
            click.echo(f'rejected: {entry!r}')
        click.echo(f'{len(words)} usable words in {path}')
        if not words:
            raise click.ClickException('word list has no usable words')

    flask_app.cli.add_command(check_words_command)

    return flask_app
