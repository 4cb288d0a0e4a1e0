import threading


class Guess:
    def __init__(self, text, feedback, at):
        self.text = text
        self.feedback = list(feedback)
        self.at = at

    @property
    def solved(self):
        return bool(self.feedback) and all(m == 'correct' for m in self.feedback)

    def to_dict(self, include_text=True):
        data = {
            'feedback': list(self.feedback),
            'at': self.at,
        }
        if include_text:
            data['text'] = self.text
        return data


class Player:
    def __init__(self, name):
        self.name = name
        self.guesses = []
        self.solved_at = None
        self.connected = True

    def reset_round(self):
        self.guesses = []
        self.solved_at = None

    def summary(self, player_id):
        """Snapshot entry: counts only, no guess text or feedback."""
        return {
            'id': player_id,
            'name': self.name,
            'guessCount': len(self.guesses),
            'solvedAt': self.solved_at,
            'connected': self.connected,
        }

    def to_dict(self, hide_solved_text=False):
        """Full record. ``hide_solved_text`` drops the text of an all-correct guess, which is the secret."""
        return {
            'name': self.name,
            'guesses': [g.to_dict(include_text=not (hide_solved_text and g.solved)) for g in self.guesses],
            'solvedAt': self.solved_at,
            'connected': self.connected,
        }


class Room:
    """One game session. Mutated only by the room state machine, under ``lock``."""

    def __init__(self, code, host, created_at):
        self.code = code
        self.host = host
        self.secret = None
        self.started = False
        self.created_at = created_at
        self.started_at = None
        self.players = {}
        # Member ids in join order; drives host succession and snapshot order
        self.join_order = []
        self.destroyed = False
        self.lock = threading.RLock()

    def add_player(self, player_id, player):
        if player_id not in self.players:
            self.join_order.append(player_id)
        self.players[player_id] = player

    def remove_player(self, player_id):
        self.join_order.remove(player_id)
        return self.players.pop(player_id)

    def members(self):
        for player_id in self.join_order:
            yield player_id, self.players[player_id]

    def to_dict(self):
        # The secret is never part of a snapshot
        return {
            'code': self.code,
            'host': self.host,
            'started': self.started,
            'playerCount': len(self.players),
            'players': [p.summary(pid) for pid, p in self.members()],
            'createdAt': self.created_at,
            'startedAt': self.started_at,
        }
