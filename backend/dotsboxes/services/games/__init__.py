"""Game domain services: board, rooms, registry and session bindings.

This package contains pure(ish) domain logic that should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from core game mechanics.
"""

from .board import Board
from .registry import RoomRegistry
from .room import JoinResult, MoveOutcome, RemovalResult, Room
from .sessions import Binding, SessionBinder

__all__ = [
    'Board',
    'Binding',
    'JoinResult',
    'MoveOutcome',
    'RemovalResult',
    'Room',
    'RoomRegistry',
    'SessionBinder',
]
