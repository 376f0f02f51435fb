from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from battleship_relay.config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(
        __name__,
        static_folder=getattr(config_class, 'STATIC_FOLDER', None),
        static_url_path='',
    )
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry and relay per app; handlers reach them through current_app
    from battleship_relay.services.match import MatchRelay, SlotRegistry
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['match_relay'] = MatchRelay(
        socketio,
        SlotRegistry(),
        namespace=namespace,
        timeout_sec=flask_app.config.get('INACTIVITY_TIMEOUT_SEC', 600),
        reset_on_activity=flask_app.config.get('RESET_TIMEOUT_ON_ACTIVITY', False),
        logger=flask_app.logger,
    )

    from battleship_relay.main import main
    flask_app.register_blueprint(main)

    # Importing here ensures the handlers bind to the initialized socketio instance
    from battleship_relay.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
