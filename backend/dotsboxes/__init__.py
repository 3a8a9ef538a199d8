from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Room table and connection bindings live as long as this app does
    from dotsboxes.services.games import RoomRegistry, SessionBinder
    registry = RoomRegistry.from_config(flask_app.config)
    binder = SessionBinder()
    flask_app.extensions['room_registry'] = registry
    flask_app.extensions['session_binder'] = binder

    # Import and register blueprints here
    from dotsboxes.main import main
    flask_app.register_blueprint(main)

    from dotsboxes.api.rooms import rooms
    # Mount room routes under /api to match frontend API client
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers
    # Importing here ensures the handlers bind to the initialized socketio instance
    from dotsboxes.socketio_events import register_socketio_handlers
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['lobby_dispatcher'] = register_socketio_handlers(
        socketio, registry, binder, namespace=namespace
    )
    flask_app.logger.info(f"[startup] namespace={namespace} board={registry.rows}x{registry.cols}")

    return flask_app
