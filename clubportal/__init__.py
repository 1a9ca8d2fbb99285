# clubportal/__init__.py

import os
import logging
from flask import Flask, g, session
from config import Config
from database import db, init_db

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    try:
        logging.basicConfig(level=getattr(logging, str(config_class.LOG_LEVEL).upper(), logging.INFO))
        logger.info("Starting Flask app creation...")

        template_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'templates'))
        logger.info(f"Template dir: {template_dir}")

        app = Flask(__name__, template_folder=template_dir)
        app.config.from_object(config_class)
        logger.info("Flask app instance created successfully")

        db.init_app(app)
        logger.info("Database initialized with Flask app")

        # Import models here to ensure they're registered before table creation
        from clubportal import models  # noqa: F401
        init_db(app)

        from clubportal.permissions import can
        from clubportal.session_store import SessionStore
        from clubportal.utils import format_date

        app.add_template_filter(format_date, 'format_date')

        @app.before_request
        def load_current_user():
            g.current_user = SessionStore(session).get()

        logger.info("Registering blueprints...")
        try:
            from clubportal.public.routes import public_bp
            from clubportal.auth.routes import auth_bp
            from clubportal.dashboard import dashboard_bp
            from clubportal.admin.routes import admin_bp
            from clubportal.api import api_bp
            from clubportal.api.routes import api_http_error

            app.register_blueprint(public_bp)
            app.register_blueprint(auth_bp)
            app.register_blueprint(dashboard_bp)
            app.register_blueprint(admin_bp)
            app.register_blueprint(api_bp)
            app.register_error_handler(404, api_http_error)
            app.register_error_handler(405, api_http_error)
            logger.info("All blueprints registered successfully")
        except Exception as e:
            logger.error(f"Failed to register blueprints: {str(e)}")
            raise

        # Add context processor for global template variables
        @app.context_processor
        def inject_globals():
            return dict(
                site_name=app.config['SITE_NAME'],
                current_user=g.get('current_user'),
                can=can,
            )

        logger.info("Flask app creation completed successfully")
        return app

    except Exception as e:
        logger.error(f"Failed to create Flask app: {str(e)}")
        logger.error(f"Error type: {type(e).__name__}")
        raise
