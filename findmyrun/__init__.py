from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData
from flask_migrate import Migrate
from flask_mail import Mail
from flask_caching import Cache


# 1. Create extension instances WITHOUT an app
# They will be "connected" to the app inside the factory

# Define naming convention for SQLAlchemy
convention = {
    "ix": 'ix_%(column_0_label)s',
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
metadata = MetaData(naming_convention=convention)

db = SQLAlchemy(metadata=metadata)
migrate = Migrate()
mail = Mail()
cache = Cache()


def create_app(config_class='config.Config'):
    """
    Application Factory Function
    """

    app = Flask(__name__, instance_relative_config=True)

    # Load configuration from the config.py file
    app.config.from_object(config_class)

    db.init_app(app)
    migrate.init_app(app, db)
    mail.init_app(app)
    cache.init_app(app)

    # JSON errors for the API surface
    from .errors import FindMyRunError

    @app.errorhandler(FindMyRunError)
    def handle_findmyrun_error(error):
        return jsonify(error=error.message), error.status_code

    @app.errorhandler(500)
    def handle_internal_error(error):
        db.session.rollback()
        return jsonify(error='Server error'), 500

    # Register Blueprints
    # Imports are *inside* the factory to avoid circular import issues
    with app.app_context():
        from .submissions_routes import submissions_bp
        from .claims_routes import claims_bp
        from .owner_routes import owner_bp
        from .admin_routes import admin_bp
        from .clubs_routes import clubs_bp

        # Import models so SQLAlchemy knows about them
        from . import models

        app.register_blueprint(submissions_bp)
        app.register_blueprint(claims_bp)
        app.register_blueprint(owner_bp)
        app.register_blueprint(admin_bp)
        app.register_blueprint(clubs_bp)

    # Register CLI commands
    from findmyrun.commands.init_db import init_db
    from findmyrun.commands.import_seed import import_seed
    from findmyrun.commands.purge_sessions import purge_sessions

    app.cli.add_command(init_db)
    app.cli.add_command(import_seed)
    app.cli.add_command(purge_sessions)

    return app
