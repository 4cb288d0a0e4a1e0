import logging
import random
import threading

logger = logging.getLogger(__name__)

# Uppercase letters and digits minus the easily confused I, L, O, 0 and 1
ROOM_CODE_ALPHABET = 'ABCDEFGHJKMNPQRSTUVWXYZ23456789'


def normalize_code(code):
    return (code or '').strip().upper()


class RoomCodeGenerator:
    """Generate a short, human-typeable room code."""

    def __init__(self, length=5, alphabet=ROOM_CODE_ALPHABET, rng=None):
        if length < 1:
            raise ValueError('room code length must be positive')
        self.length = length
        self.alphabet = alphabet
        self._rng = rng or random.SystemRandom()

    def __call__(self):
        return ''.join(self._rng.choice(self.alphabet) for _ in range(self.length))


class RoomRegistry:
    """Open rooms by code. Insert, lookup and delete are atomic."""

    def __init__(self, generate_code=None):
        self._generate_code = generate_code or RoomCodeGenerator()
        self._rooms = {}
        self._lock = threading.Lock()

    def create(self, build_room):
        """Allocate an unused code and register ``build_room(code)`` under it."""
        with self._lock:
            code = self._generate_code()
            while code in self._rooms:
                logger.warning(f"[code-collision] code={code} regenerating")
                code = self._generate_code()
            room = build_room(code)
            self._rooms[code] = room
            return room

    def get(self, code):
        with self._lock:
            return self._rooms.get(normalize_code(code))

    def delete(self, code):
        with self._lock:
            return self._rooms.pop(normalize_code(code), None)

    def rooms(self):
        with self._lock:
            return list(self._rooms.values())

    def __contains__(self, code):
        return self.get(code) is not None

    def __len__(self):
        with self._lock:
            return len(self._rooms)
