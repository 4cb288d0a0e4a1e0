import logging
import time
from typing import Callable, List, Optional

from wordroom.models import Guess, Player, Room
from .errors import (
    AlreadyStarted,
    BadRequest,
    GameAlreadyStarted,
    InvalidLength,
    NotAMember,
    NotHost,
    NotStarted,
    RoomNotFound,
)
from .evaluator import evaluate_guess, is_solved
from .registry import RoomRegistry, normalize_code
from .scoring import rank_winners
from .words import WordSource, normalize_word

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class RoomStateMachine:
    """Room lifecycle: open -> started -> open ... -> destroyed.

    All room state changes go through this class. Each operation runs under
    the room's own lock, so unrelated rooms never wait on each other. Events
    go out through ``transport``, which must provide ``subscribe``,
    ``unsubscribe``, ``broadcast`` and ``send``.
    """

    def __init__(
        self,
        registry: RoomRegistry,
        word_source: WordSource,
        transport,
        clock: Optional[Callable[[], int]] = None,
        default_host_name: str = 'Host',
        default_player_name: str = 'Player',
    ):
        self.registry = registry
        self.word_source = word_source
        self.transport = transport
        self.clock = clock or now_ms
        self.default_host_name = default_host_name
        self.default_player_name = default_player_name

    # ---- lookups ----

    def _require_room(self, code) -> Room:
        room = self.registry.get(code)
        if room is None:
            raise RoomNotFound(normalize_code(code))
        return room

    @staticmethod
    def _ensure_live(room: Room) -> None:
        # Another thread may have destroyed the room while we waited on its lock
        if room.destroyed:
            raise RoomNotFound(room.code)

    def _room_updated(self, room: Room) -> None:
        self.transport.broadcast(room.code, 'roomUpdated', {'roomState': room.to_dict()})

    # ---- operations ----

    def create_room(self, player_id, name=None) -> Room:
        created_at = self.clock()
        host = Player(name or self.default_host_name)

        def build(code):
            room = Room(code, player_id, created_at)
            room.add_player(player_id, host)
            return room

        room = self.registry.create(build)
        with room.lock:
            self.transport.subscribe(player_id, room.code)
            self.transport.send(player_id, 'roomCreated', {'code': room.code, 'roomState': room.to_dict()})
        logger.info(f"[room-created] room={room.code} host={player_id}")
        return room

    def join_room(self, player_id, code, name=None) -> Room:
        room = self._require_room(code)
        with room.lock:
            self._ensure_live(room)
            if room.started:
                raise GameAlreadyStarted()
            player = room.players.get(player_id)
            if player is None:
                room.add_player(player_id, Player(name or self.default_player_name))
            else:
                # Same connection joining again keeps its record
                player.name = name or player.name
                player.connected = True
            self.transport.subscribe(player_id, room.code)
            self._room_updated(room)
            logger.info(f"[room-joined] room={room.code} player={player_id} players={len(room.players)}")
            return room

    def start_game(self, player_id, code, chosen_word=None) -> Room:
        room = self._require_room(code)
        with room.lock:
            self._ensure_live(room)
            if room.host != player_id:
                raise NotHost()
            if room.started:
                raise AlreadyStarted()

            secret = normalize_word(chosen_word)
            if not secret:
                secret = self.word_source.pick()
            if not secret.isalpha():
                raise BadRequest('Word must be alphabetic')

            for player in room.players.values():
                player.reset_round()
            room.secret = secret
            room.started = True
            room.started_at = self.clock()

            self.transport.broadcast(room.code, 'gameStarted', {'roomState': room.to_dict()})
            logger.info(f"[round-start] room={room.code} length={len(secret)} players={len(room.players)}")
            return room

    def submit_guess(self, player_id, code, guess) -> List[str]:
        room = self._require_room(code)
        with room.lock:
            self._ensure_live(room)
            if not room.started:
                raise NotStarted()
            text = normalize_word(guess)
            if not text or len(text) != len(room.secret):
                raise InvalidLength()
            player = room.players.get(player_id)
            if player is None:
                raise NotAMember()
            if not text.isalpha():
                raise BadRequest('Guess must be alphabetic')

            feedback = evaluate_guess(room.secret, text)
            at = self.clock()
            player.guesses.append(Guess(text, feedback, at))
            if is_solved(feedback):
                player.solved_at = at
                logger.info(f"[solved] room={room.code} player={player_id} guesses={len(player.guesses)}")

            self.transport.broadcast(room.code, 'playerUpdate', {
                'playerId': player_id,
                'snapshot': player.to_dict(hide_solved_text=True),
                'roomState': room.to_dict(),
            })
            self._complete_round_if_won(room)
            return feedback

    def _complete_round_if_won(self, room: Room) -> None:
        winners = rank_winners(room)
        if not winners:
            return
        room.started = False
        self.transport.broadcast(room.code, 'roundComplete', {'winners': winners, 'secret': room.secret})
        logger.info(f"[round-complete] room={room.code} winner={winners[0]['id']} winners={len(winners)}")

    def leave_room(self, player_id, code) -> Optional[Room]:
        """Remove the player for good. Returns None when the room was destroyed."""
        room = self._require_room(code)
        with room.lock:
            self._ensure_live(room)
            if player_id not in room.players:
                raise NotAMember()
            room.remove_player(player_id)
            self.transport.unsubscribe(player_id, room.code)

            if not room.players:
                self.registry.delete(room.code)
                room.destroyed = True
                logger.info(f"[room-destroyed] room={room.code} last={player_id}")
                return None

            if room.host == player_id:
                room.host = room.join_order[0]
                logger.info(f"[host-promoted] room={room.code} host={room.host}")
            self._room_updated(room)
            logger.info(f"[room-left] room={room.code} player={player_id} players={len(room.players)}")
            return room

    def on_disconnect(self, player_id) -> List[str]:
        """Mark the connection as gone in every room it belongs to.

        The player record and the host stay as they are.
        """
        affected = []
        for room in self.registry.rooms():
            with room.lock:
                if room.destroyed or player_id not in room.players:
                    continue
                room.players[player_id].connected = False
                self._room_updated(room)
                affected.append(room.code)
        if affected:
            logger.info(f"[disconnect] player={player_id} rooms={','.join(affected)}")
        return affected

    def snapshot(self, code) -> dict:
        room = self._require_room(code)
        with room.lock:
            self._ensure_live(room)
            return room.to_dict()
