import itertools
import string
import threading
from typing import Any, Dict, List, Optional

from dotsboxes.errors import RoomNotFound
from dotsboxes.models import display_name, generate_room_code
from .room import Room


class RoomRegistry:
    """Process-wide table of live rooms, keyed by room code.

    The mapping is guarded by its own lock. Room contents are guarded by
    each room's lock; when both are needed the room lock is taken first.
    The binder lock may be taken while holding the registry lock, never
    the other way round.
    """

    def __init__(self, rows=6, cols=6, code_length=4,
                 code_alphabet=string.ascii_uppercase + string.digits,
                 max_code_attempts=100):
        self.rows = rows
        self.cols = cols
        self.code_length = code_length
        self.code_alphabet = code_alphabet
        self.max_code_attempts = max_code_attempts
        self._rooms: Dict[str, Room] = {}
        self._seq = itertools.count(1)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config) -> 'RoomRegistry':
        return cls(
            rows=int(config.get('BOARD_ROWS', 6)),
            cols=int(config.get('BOARD_COLS', 6)),
            code_length=int(config.get('ROOM_CODE_LENGTH', 4)),
            code_alphabet=config.get('ROOM_CODE_ALPHABET') or string.ascii_uppercase + string.digits,
            max_code_attempts=int(config.get('ROOM_CODE_MAX_ATTEMPTS', 100)),
        )

    def create(self, sid: str, identity=None, binder=None) -> Room:
        """Open a room with an unused code, hosted by connection ``sid``.

        The host is bound (when a binder is given) and seated as player 1
        before the room is published, so no other event can observe it
        empty. Raises AlreadySeated if ``sid`` already holds a seat.
        """
        identity = dict(identity or {})
        with self._lock:
            code = generate_room_code(
                lambda c: c in self._rooms,
                length=self.code_length,
                alphabet=self.code_alphabet,
                max_attempts=self.max_code_attempts,
            )
            room = Room(code, display_name(identity), seq=next(self._seq), rows=self.rows, cols=self.cols)
            binding = binder.bind(sid, code) if binder is not None else None
            result = room.join(sid, identity)
            if binding is not None:
                binding.role, binding.p_index = result.role, result.p_index
            self._rooms[code] = room
            return room

    def get(self, room_id) -> Optional[Room]:
        if not isinstance(room_id, str):
            return None
        with self._lock:
            return self._rooms.get(room_id.strip().upper())

    def require(self, room_id) -> Room:
        room = self.get(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        return room

    def delete(self, room_id: str) -> Optional[Room]:
        with self._lock:
            room = self._rooms.pop(room_id, None)
        if room is not None:
            room.closed = True
        return room

    def list_summaries(self) -> List[Dict[str, Any]]:
        # Creation order; labels come from the sequence number fixed at creation
        with self._lock:
            rooms = list(self._rooms.values())
        return [room.summary() for room in rooms]

    def __len__(self):
        with self._lock:
            return len(self._rooms)

    def __contains__(self, room_id):
        return self.get(room_id) is not None
