import threading
from typing import Dict, NamedTuple, Optional, Tuple

from dotsboxes.errors import AlreadySeated
from .room import RemovalResult, Room


class Binding:
    """Where a connection currently sits: one room, one role."""

    def __init__(self, room_id: str, role: Optional[str] = None, p_index: Optional[int] = None):
        self.room_id = room_id
        self.role = role
        self.p_index = p_index

    def __repr__(self):
        return f'<Binding room={self.room_id} role={self.role} p={self.p_index}>'


class Departure(NamedTuple):
    room: Room
    removal: RemovalResult
    room_deleted: bool
    # Spectators unseated because their room went away
    evicted: Tuple[str, ...] = ()


class SessionBinder:
    """Maps each live connection (Socket.IO sid) to at most one room seat."""

    def __init__(self):
        self._bindings: Dict[str, Binding] = {}
        self._lock = threading.Lock()

    def get(self, sid: str) -> Optional[Binding]:
        with self._lock:
            return self._bindings.get(sid)

    def bind(self, sid: str, room_id: str, role: Optional[str] = None,
             p_index: Optional[int] = None) -> Binding:
        with self._lock:
            existing = self._bindings.get(sid)
            if existing is not None:
                raise AlreadySeated(sid, existing.room_id)
            binding = Binding(room_id, role, p_index)
            self._bindings[sid] = binding
            return binding

    def unbind(self, sid: str) -> Optional[Binding]:
        with self._lock:
            return self._bindings.pop(sid, None)

    def depart(self, sid: str, registry) -> Optional[Departure]:
        """Drop the connection's seat, deleting its room once no player is left.

        Returns None when the connection was not seated anywhere.
        """
        binding = self.unbind(sid)
        if binding is None:
            return None
        room = registry.get(binding.room_id)
        if room is None:
            return None
        with room.lock:
            removal = room.remove_participant(sid)
            deleted = False
            evicted = ()
            if removal.room_now_empty and not room.closed:
                registry.delete(room.id)
                deleted = True
                evicted = tuple(s.sid for s in room.spectators)
                with self._lock:
                    for other in evicted:
                        self._bindings.pop(other, None)
        return Departure(room, removal, deleted, evicted)

    def __len__(self):
        with self._lock:
            return len(self._bindings)
