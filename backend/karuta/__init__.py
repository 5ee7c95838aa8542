import json
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
    "http://localhost:8080",
    "http://127.0.0.1:8080",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def _read_poems_file(path):
    try:
        with open(path, encoding='utf-8') as fh:
            return json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise click.ClickException(f"Could not read poem file {path}: {exc}")


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import and register blueprints here
    from karuta.main import main
    flask_app.register_blueprint(main)

    from karuta.api.games import games
    # Mount game routes under /api to match frontend API client
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Register Socket.IO event handlers
    from karuta.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    from karuta.services.games.validator import validate_collection

    @click.command('validate-poems')
    @click.argument('path', required=False)
    def validate_poems_command(path):
        """Validates a poem JSON file without touching the database."""
        path = path or flask_app.config['POEMS_PATH']
        result = validate_collection(_read_poems_file(path))
        for err in result.errors:
            click.echo(err)
        click.echo(f"{path}: {'valid' if result.valid else 'invalid'}")
        if not result.valid:
            raise SystemExit(1)

    @click.command('seed-poems')
    @click.argument('path', required=False)
    def seed_poems_command(path):
        """Creates tables and replaces the poem catalog from a JSON file."""
        from karuta.models import Poem
        path = path or flask_app.config['POEMS_PATH']
        data = _read_poems_file(path)
        result = validate_collection(data)
        if not result.valid:
            for err in result.errors:
                click.echo(err)
            flask_app.logger.error(f"[seed] refused {path}: {len(result.errors)} error(s)")
            raise SystemExit(1)
        with flask_app.app_context():
            db.create_all()
            Poem.query.delete()
            for item in data:
                db.session.add(Poem.from_dict(item))
            db.session.commit()
            flask_app.logger.info(f"[seed] loaded {len(data)} poems from {path}")
            click.echo(f'Poem catalog has been seeded with {len(data)} poems!')

    flask_app.cli.add_command(validate_poems_command)
    flask_app.cli.add_command(seed_poems_command)

    return flask_app
