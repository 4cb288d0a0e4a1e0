"""Request failures reported back to the client that sent the request.

Every error carries a stable ``error_code`` so clients can branch on it
without parsing the message.
"""


class GameError(Exception):
    """Base class for all recoverable game errors."""
    error_code = 'GameError'
    message = 'Game error'

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_ack(self):
        return {'ok': False, 'error': self.message, 'errorCode': self.error_code}


class BadRequest(GameError):
    error_code = 'BadRequest'
    message = 'Bad request'


class RoomNotFound(GameError):
    error_code = 'RoomNotFound'
    message = 'Room not found'

    def __init__(self, code=None):
        self.code = code
        super().__init__()


class GameAlreadyStarted(GameError):
    """Joining is closed while a round is in progress."""
    error_code = 'GameAlreadyStarted'
    message = 'Game already started'


class AlreadyStarted(GameError):
    error_code = 'AlreadyStarted'
    message = 'Already started'


class NotHost(GameError):
    error_code = 'NotHost'
    message = 'Only host can start'


class NotStarted(GameError):
    error_code = 'NotStarted'
    message = 'Game not started'


class InvalidLength(GameError):
    error_code = 'InvalidLength'
    message = 'Invalid guess length'


class NotAMember(GameError):
    error_code = 'NotAMember'
    message = 'Not in room'
