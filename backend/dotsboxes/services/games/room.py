import threading
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from dotsboxes.models import Player, Spectator
from .board import EDGE_TYPES, Board

# Move outcome kinds
PLAIN = 'plain'
SCORED = 'scored'
GAME_OVER = 'game_over'

# Rejection reason codes
MALFORMED = 'malformed'
ROOM_NOT_FOUND = 'room_not_found'
NOT_A_PLAYER = 'not_a_player'
NOT_YOUR_TURN = 'not_your_turn'
FINISHED = 'game_over'
OUT_OF_RANGE = 'out_of_range'
EDGE_TAKEN = 'edge_taken'


class MoveOutcome(NamedTuple):
    accepted: bool
    reason: Optional[str] = None
    kind: Optional[str] = None
    p_index: Optional[int] = None
    move: Optional[Dict[str, Any]] = None
    completed: Tuple[Tuple[int, int], ...] = ()
    winner: Optional[int] = None

    @classmethod
    def rejected(cls, reason, move=None):
        return cls(accepted=False, reason=reason, move=move)


class JoinResult(NamedTuple):
    role: str  # 'player' or 'spectator'
    p_index: Optional[int] = None
    started: bool = False


class RemovalResult(NamedTuple):
    player_removed: Optional[int]
    spectator_removed: bool
    room_now_empty: bool


def parse_move(move) -> Optional[Dict[str, Any]]:
    """Normalise an inbound move payload, or None if it is malformed."""
    if not isinstance(move, dict):
        return None
    edge_type = move.get('type')
    r, c = move.get('r'), move.get('c')
    if edge_type not in EDGE_TYPES:
        return None
    # bool is an int subclass; reject it explicitly
    if not all(isinstance(x, int) and not isinstance(x, bool) for x in (r, c)):
        return None
    return {'type': edge_type, 'r': r, 'c': c}


class Room:
    """One game: two player seats, any number of spectators, one board.

    Callers hold ``room.lock`` for the whole of join / make_move /
    remove_participant plus the snapshot they broadcast afterwards.
    """

    def __init__(self, room_id: str, host: str, seq: int = 0, rows: int = 6, cols: int = 6):
        self.id = room_id
        self.host = host
        self.seq = seq
        self.config = {'rows': rows, 'cols': cols}
        self.players: List[Player] = []
        self.spectators: List[Spectator] = []
        self.board = Board(rows, cols)
        self.turn = 1
        self.game_over = False
        # Set once the registry has dropped this room
        self.closed = False
        self.lock = threading.RLock()

    @property
    def name(self) -> str:
        return f'Room #{self.seq}'

    @property
    def status(self) -> str:
        return 'Playing' if len(self.players) >= 2 else 'Waiting'

    @property
    def phase(self) -> str:
        if not self.players:
            return 'empty'
        if self.game_over:
            return 'finished'
        if len(self.players) < 2:
            return 'awaiting_opponent'
        return 'in_play'

    def total_score(self) -> int:
        return sum(p.score for p in self.players)

    def player_for(self, sid: str) -> Optional[Player]:
        return next((p for p in self.players if p.sid == sid), None)

    def spectator_for(self, sid: str) -> Optional[Spectator]:
        return next((s for s in self.spectators if s.sid == sid), None)

    def reset(self) -> None:
        rows, cols = self.config['rows'], self.config['cols']
        self.board = Board(rows, cols)
        self.turn = 1
        self.game_over = False
        for p in self.players:
            p.score = 0

    def join(self, sid: str, identity: Optional[Dict[str, Any]] = None) -> JoinResult:
        """Seat a connection as a player if a seat is free, else as a spectator.

        Taking a seat always starts a fresh game, even if the other seat
        holds a player from a game that was interrupted.
        """
        if len(self.players) < 2:
            taken = {p.p_index for p in self.players}
            p_index = 2 if 1 in taken else 1
            self.players.append(Player(sid, p_index, identity))
            self.reset()
            return JoinResult('player', p_index=p_index, started=True)
        self.spectators.append(Spectator(sid, identity))
        return JoinResult('spectator')

    def make_move(self, sid: str, move) -> MoveOutcome:
        parsed = parse_move(move)
        if parsed is None:
            return MoveOutcome.rejected(MALFORMED, move if isinstance(move, dict) else None)

        player = self.player_for(sid)
        if player is None:
            return MoveOutcome.rejected(NOT_A_PLAYER, parsed)
        if self.game_over:
            return MoveOutcome.rejected(FINISHED, parsed)
        if player.p_index != self.turn:
            return MoveOutcome.rejected(NOT_YOUR_TURN, parsed)

        edge_type, r, c = parsed['type'], parsed['r'], parsed['c']
        if not self.board.in_range(edge_type, r, c):
            return MoveOutcome.rejected(OUT_OF_RANGE, parsed)
        if not self.board.apply_edge(edge_type, r, c, player.p_index):
            return MoveOutcome.rejected(EDGE_TAKEN, parsed)

        completed = tuple(self.board.settle_boxes(player.p_index))
        if completed:
            player.score += len(completed)
            if Board.is_full(self.config['rows'], self.config['cols'], self.total_score()):
                self.game_over = True
                return MoveOutcome(True, kind=GAME_OVER, p_index=player.p_index, move=parsed,
                                   completed=completed, winner=player.p_index)
            # Completing a box earns another move
            return MoveOutcome(True, kind=SCORED, p_index=player.p_index, move=parsed, completed=completed)

        self.turn = 2 if self.turn == 1 else 1
        return MoveOutcome(True, kind=PLAIN, p_index=player.p_index, move=parsed)

    def remove_participant(self, sid: str) -> RemovalResult:
        player = self.player_for(sid)
        if player is not None:
            self.players.remove(player)
        spectator = self.spectator_for(sid)
        if spectator is not None:
            self.spectators.remove(spectator)
        # A finished game loses its meaning once a player's score leaves with
        # them; the one left waits for an opponent on a fresh board.
        if player is not None and self.game_over and self.players:
            self.reset()
        return RemovalResult(
            player_removed=player.p_index if player is not None else None,
            spectator_removed=spectator is not None,
            room_now_empty=not self.players,
        )

    def summary(self) -> Dict[str, Any]:
        count = len(self.players)
        return {
            'id': self.id,
            'name': self.name,
            'count': count,
            'status': self.status,
        }

    def to_dict(self) -> Dict[str, Any]:
        game_state = self.board.to_dict()
        game_state['turn'] = self.turn
        game_state['gameOver'] = self.game_over
        return {
            'id': self.id,
            'name': self.name,
            'host': self.host,
            'players': [p.to_dict() for p in self.players],
            'spectators': [s.to_dict() for s in self.spectators],
            'gameState': game_state,
            'config': dict(self.config),
        }
