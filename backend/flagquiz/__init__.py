from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from flagquiz.main import main
    flask_app.register_blueprint(main)

    from flagquiz.api.quiz import quiz
    flask_app.register_blueprint(quiz, url_prefix='/api/quiz')

    from flagquiz.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Ensure models are registered on the metadata before create_all / migrations
    from flagquiz import models  # noqa: F401

    # The default in-memory database only exists inside this process
    with flask_app.app_context():
        db.create_all()

    @click.command('results-reset')
    def results_reset_command():
        """Drops and recreates the results tables."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            click.echo('Results have been reset!')

    flask_app.cli.add_command(results_reset_command)

    return flask_app
