import random
import string
from typing import Any, Callable, Dict, Optional

from dotsboxes.errors import RoomCodeExhausted


class Spectator:
    """A connection watching a room. Holds no game state."""

    def __init__(self, sid: str, identity: Optional[Dict[str, Any]] = None):
        self.sid = sid
        self.identity = dict(identity or {})

    def to_dict(self):
        data = dict(self.identity)
        data['socketId'] = self.sid
        return data


class Player(Spectator):
    def __init__(self, sid: str, p_index: int, identity: Optional[Dict[str, Any]] = None):
        super(Player, self).__init__(sid, identity)
        self.p_index = p_index
        self.score = 0

    def to_dict(self):
        data = super(Player, self).to_dict()
        data['pIndex'] = self.p_index
        data['score'] = self.score
        return data


def display_name(identity) -> str:
    return str((identity or {}).get('username') or 'Guest')


def generate_room_code(is_taken: Callable[[str], bool], length=4,
                       alphabet=string.ascii_uppercase + string.digits,
                       max_attempts=100):
    """Generate a short room code not currently in use."""
    for _ in range(max_attempts):
        code = ''.join(random.choices(alphabet, k=length))
        if not is_taken(code):
            return code
    raise RoomCodeExhausted(f'no free room code after {max_attempts} attempts')
