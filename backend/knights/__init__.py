from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config
from knights.services.board import BoardStore

boards = BoardStore()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    boards.init_app(flask_app)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from knights import rendering
    rendering.init_app(flask_app)

    # Import and register blueprints here
    from knights.main import main
    flask_app.register_blueprint(main)

    from knights.api.boards import boards_api
    flask_app.register_blueprint(boards_api, url_prefix='/api/boards')

    from knights.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('boards-clear')
    def boards_clear_command():
        """Discards every live board."""
        dropped = boards.clear()
        print(f'Discarded {dropped} board(s).')

    flask_app.cli.add_command(boards_clear_command)

    return flask_app
