from typing import Any, Dict, List

from wordroom.models import Room


def rank_winners(room: Room) -> List[Dict[str, Any]]:
    """Rank the players who solved the current round.

    Earliest ``solvedAt`` wins; equal times go to the player with fewer
    guesses. Players tied on both keep their join order. An empty list
    means nobody has solved the word yet.
    """
    winners = [
        {
            'id': player_id,
            'name': player.name,
            'solvedAt': player.solved_at,
            'guessCount': len(player.guesses),
        }
        for player_id, player in room.members()
        if player.solved_at is not None
    ]
    winners.sort(key=lambda w: (w['solvedAt'], w['guessCount']))
    return winners
