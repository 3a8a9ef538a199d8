import os
import string

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Default board size for newly created rooms
    BOARD_ROWS = int(os.environ.get('BOARD_ROWS', '6'))
    BOARD_COLS = int(os.environ.get('BOARD_COLS', '6'))
    # Room codes: short, human-typeable, regenerated on collision
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '4'))
    ROOM_CODE_ALPHABET = os.environ.get('ROOM_CODE_ALPHABET') or (string.ascii_uppercase + string.digits)
    ROOM_CODE_MAX_ATTEMPTS = int(os.environ.get('ROOM_CODE_MAX_ATTEMPTS', '100'))
    # Comma separated list of origins allowed for HTTP and Socket.IO
    CORS_ORIGINS = [
        o.strip() for o in (os.environ.get('CORS_ORIGINS') or
                            'http://localhost:5173,http://127.0.0.1:5173').split(',') if o.strip()
    ]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3001'))
