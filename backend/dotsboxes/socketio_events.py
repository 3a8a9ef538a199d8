from flask import current_app, request
from flask_socketio import close_room, emit, join_room

from dotsboxes.errors import AlreadySeated, GameError, RoomNotFound
from dotsboxes.services.games.room import GAME_OVER, ROOM_NOT_FOUND, SCORED, MoveOutcome


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


class LobbyDispatcher:
    """Routes inbound Socket.IO events to the registry and session binder.

    Room state is mutated and snapshotted under the room lock; every emit
    happens after the lock is released.
    """

    def __init__(self, socketio, registry, binder, namespace='/'):
        self.socketio = socketio
        self.registry = registry
        self.binder = binder
        self.namespace = namespace

    # ---- fan-out helpers ----

    def _to_room(self, event, payload, room_id, skip_sid=None):
        self.socketio.emit(event, payload, to=room_id, skip_sid=skip_sid, namespace=self.namespace)

    def broadcast_room_list(self):
        self.socketio.emit('room_list', self.registry.list_summaries(), namespace=self.namespace)

    # ---- inbound events ----

    def on_connect(self, auth=None):
        emit('room_list', self.registry.list_summaries())

    def on_request_room_list(self, data=None):
        emit('room_list', self.registry.list_summaries())

    def on_create_lobby(self, data=None):
        sid = _get_sid()
        identity = data if isinstance(data, dict) else {}
        try:
            room = self.registry.create(sid, identity, binder=self.binder)
        except GameError as exc:
            current_app.logger.info(f"[room-create-reject] sid={sid} reason={exc}")
            emit('error', str(exc))
            return

        with room.lock:
            state = room.to_dict()

        join_room(room.id)
        current_app.logger.info(f"[room-create] room={room.id} host={room.host} sid={sid}")
        emit('lobby_created', {'roomId': room.id, 'state': state})
        self.broadcast_room_list()

    def on_join_lobby(self, data=None):
        sid = _get_sid()
        data = data if isinstance(data, dict) else {}
        room_id = data.get('roomId')
        identity = data.get('userData') or data.get('identity')
        identity = identity if isinstance(identity, dict) else {}

        try:
            room = self.registry.require(room_id)
        except RoomNotFound as exc:
            emit('error', str(exc))
            return

        with room.lock:
            if room.closed:
                emit('error', str(RoomNotFound(room_id)))
                return
            try:
                binding = self.binder.bind(sid, room.id)
            except AlreadySeated as exc:
                emit('error', str(exc))
                return
            result = room.join(sid, identity)
            binding.role, binding.p_index = result.role, result.p_index
            state = room.to_dict()

        join_room(room.id)
        if result.role == 'player':
            current_app.logger.info(f"[room-join] room={room.id} sid={sid} p={result.p_index} game restarted")
            self._to_room('game_start', {'state': state}, room.id)
            self.broadcast_room_list()
        else:
            current_app.logger.info(f"[room-spectate] room={room.id} sid={sid}")
            emit('joined_spectator', {'state': state})

    def on_make_move(self, data=None):
        sid = _get_sid()
        data = data if isinstance(data, dict) else {}
        room_id = data.get('roomId')
        move = data.get('move')

        room = self.registry.get(room_id)
        if room is None:
            self._reject(sid, room_id, MoveOutcome.rejected(ROOM_NOT_FOUND, move if isinstance(move, dict) else None))
            return

        with room.lock:
            outcome = room.make_move(sid, move)
            state = room.to_dict() if outcome.accepted else None

        if not outcome.accepted:
            self._reject(sid, room.id, outcome)
            return

        m = outcome.move
        current_app.logger.info(
            f"[move] room={room.id} p={outcome.p_index} {m['type']}({m['r']},{m['c']}) outcome={outcome.kind} boxes={len(outcome.completed)}"
        )
        if outcome.kind == GAME_OVER:
            self._to_room('game_over', {'state': state, 'winner': outcome.winner}, room.id)
        elif outcome.kind == SCORED:
            self._to_room('state_update', {'state': state, 'lastMove': m, 'scorer': outcome.p_index}, room.id)
        else:
            self._to_room('state_update', {'state': state, 'lastMove': m}, room.id)

    def _reject(self, sid, room_id, outcome: MoveOutcome):
        current_app.logger.info(f"[move-reject] room={room_id} sid={sid} reason={outcome.reason}")
        emit('move_rejected', {'roomId': room_id, 'move': outcome.move, 'reason': outcome.reason})

    def on_disconnect(self, reason=None):
        sid = _get_sid()
        departure = self.binder.depart(sid, self.registry)
        if departure is None:
            return
        room, removal = departure.room, departure.removal
        if removal.player_removed is not None:
            current_app.logger.info(f"[player-left] room={room.id} p={removal.player_removed} sid={sid}")
            self._to_room('player_left', {'pIndex': removal.player_removed}, room.id, skip_sid=sid)
        if departure.room_deleted:
            current_app.logger.info(f"[room-delete] room={room.id} evicted={len(departure.evicted)}")
            close_room(room.id, namespace=self.namespace)
        if removal.player_removed is not None:
            self.broadcast_room_list()

    def on_error(self, exc):
        event = getattr(request, 'event', None) or {}
        current_app.logger.exception(f"[socket-error] sid={_get_sid()} event={event.get('message')}: {exc}")
        emit('error', 'Internal server error')


def register_socketio_handlers(socketio, registry, binder, namespace: str = '/') -> LobbyDispatcher:
    """Register Socket.IO event handlers bound to one registry/binder pair."""
    dispatcher = LobbyDispatcher(socketio, registry, binder, namespace=namespace)
    socketio.on_event('connect', dispatcher.on_connect, namespace=namespace)
    socketio.on_event('disconnect', dispatcher.on_disconnect, namespace=namespace)
    socketio.on_event('request_room_list', dispatcher.on_request_room_list, namespace=namespace)
    socketio.on_event('create_lobby', dispatcher.on_create_lobby, namespace=namespace)
    socketio.on_event('join_lobby', dispatcher.on_join_lobby, namespace=namespace)
    socketio.on_event('make_move', dispatcher.on_make_move, namespace=namespace)
    socketio.on_error(namespace)(dispatcher.on_error)
    return dispatcher
