import logging

from flask import Flask
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy

# Initialize extensions
db = SQLAlchemy()
bcrypt = Bcrypt()

logger = logging.getLogger(__name__)


def create_app(config_class='skillswap.config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    bcrypt.init_app(app)

    from skillswap.auth import init_dummy_hash
    init_dummy_hash(app)

    CORS(app, resources={
        r"/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", app.config['ADMIN_HEADER']],
        }
    })

    # Create tables if they don't exist
    with app.app_context():
        create_tables()

    # Import and register Blueprints
    from skillswap.account_routes import account_bp
    from skillswap.profile_routes import profile_bp
    from skillswap.skill_routes import skill_bp
    from skillswap.proof_routes import proof_bp
    from skillswap.post_routes import post_bp

    app.register_blueprint(account_bp, url_prefix='/accounts')
    app.register_blueprint(profile_bp, url_prefix='/users')
    app.register_blueprint(skill_bp)
    app.register_blueprint(proof_bp)
    app.register_blueprint(post_bp)

    from skillswap.errors import register_error_handlers
    from skillswap.cli import register_commands

    register_error_handlers(app)
    register_commands(app)

    logger.info("SkillSwap API configured (debug=%s)", app.config.get('DEBUG'))
    return app


def create_tables():
    """Create every table and seed the reference rows the workflows rely on."""
    from skillswap import models  # noqa: F401  (registers the tables)
    from skillswap.catalog import seed_skill_levels

    db.create_all()
    seed_skill_levels(db.session)


def _configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.setLevel(level)
