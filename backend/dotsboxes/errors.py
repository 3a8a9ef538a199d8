class GameError(Exception):
    """Base class for structural rejections raised by the game services."""


class RoomNotFound(GameError):
    def __init__(self, room_id):
        super(RoomNotFound, self).__init__('Room not found')
        self.room_id = room_id


class AlreadySeated(GameError):
    def __init__(self, sid, room_id):
        super(AlreadySeated, self).__init__('Already in a room')
        self.sid = sid
        self.room_id = room_id


class RoomCodeExhausted(GameError):
    pass
