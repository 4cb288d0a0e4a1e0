"""Game domain services: guess evaluation, rooms and rounds.

This package holds the transport-free game logic. Socket handlers and HTTP
routes call into ``RoomStateMachine`` and never touch room state directly.
"""

from .errors import GameError
from .registry import RoomCodeGenerator, RoomRegistry
from .state_machine import RoomStateMachine
from .words import WordSource

__all__ = [
    'GameError',
    'RoomCodeGenerator',
    'RoomRegistry',
    'RoomStateMachine',
    'WordSource',
]
