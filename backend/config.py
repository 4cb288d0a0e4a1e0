import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma-separated list of origins allowed to open a socket
    CORS_ALLOWED_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ALLOWED_ORIGINS',
            'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
        ).split(',') if o.strip()
    ]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Word list file, one word per line. None uses the packaged vocabulary.
    WORDS_FILE = os.environ.get('WORDS_FILE') or None
    # In-code vocabulary that takes precedence over WORDS_FILE. Not read from
    # the environment; set it in a config subclass (the test config does).
    WORD_LIST = None
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '5'))
    DEFAULT_HOST_NAME = os.environ.get('DEFAULT_HOST_NAME', 'Host')
    DEFAULT_PLAYER_NAME = os.environ.get('DEFAULT_PLAYER_NAME', 'Player')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
