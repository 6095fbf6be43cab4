from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
jwt = JWTManager()

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    jwt.init_app(flask_app)
    CORS(
        flask_app,
        origins=flask_app.config.get('CORS_ORIGINS', []),
        expose_headers=['X-Total-Count', 'X-Page', 'X-Page-Size', 'Location'],
    )

    from gameapi.errors import register_error_handlers
    register_error_handlers(flask_app)

    # Import and register blueprints here
    from gameapi.main import main
    flask_app.register_blueprint(main)

    from gameapi.api.auth import auth
    from gameapi.api.players import players
    from gameapi.api.characters import characters
    from gameapi.api.items import items
    from gameapi.api.scores import scores
    # Mount resource routes under /api to match frontend API client
    flask_app.register_blueprint(auth, url_prefix='/api/auth')
    flask_app.register_blueprint(players, url_prefix='/api/players')
    flask_app.register_blueprint(characters, url_prefix='/api/characters')
    flask_app.register_blueprint(items, url_prefix='/api/items')
    flask_app.register_blueprint(scores, url_prefix='/api/scores')

    # Flask-Login resolves the caller from the bearer token on every request
    from gameapi.errors import Unauthenticated
    from gameapi.services.sessions import verify, bearer_token

    @login_manager.request_loader
    def load_caller(request):
        token = bearer_token(request.headers.get('Authorization'))
        return verify(token) if token else None

    @login_manager.unauthorized_handler
    def unauthorized():
        raise Unauthenticated()

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from gameapi.seed import seed_database
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            seed_database()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
