from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
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
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Wire the game services once per app; routes and socket handlers
    # reach them through flask_app.extensions
    from cardroom.services.rooms import build_services
    build_services(flask_app, socketio)

    # Import and register blueprints here
    from cardroom.main import main
    flask_app.register_blueprint(main)

    from cardroom.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    from cardroom.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    from cardroom.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, user_id)

    @login_manager.request_loader
    def load_user_from_request(req):
        # The identity provider sits in front of us and asserts the caller
        identity = (req.headers.get(flask_app.config['IDENTITY_HEADER']) or '').strip()
        if not identity:
            return None
        return flask_app.extensions['room_repository'].upsert_user(identity)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'message': 'Authentication required'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            inserted = flask_app.extensions['card_store'].ensure_seeded()
            print(f'Database has been reset and seeded with {inserted} cards!')

    @click.command('seed-cards')
    def seed_cards_command():
        """Seeds the prompt and response decks if they are empty."""
        with flask_app.app_context():
            inserted = flask_app.extensions['card_store'].ensure_seeded()
            print(f'Seeded {inserted} cards.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(seed_cards_command)

    return flask_app
