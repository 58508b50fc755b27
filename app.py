from flask import Flask, redirect, url_for, request, jsonify

from config import Config
from utils.auth import current_gate
from utils.cloudinary import ImageUploader
from utils.db import EXTENSION_KEY, init_db_connection
from utils.errors import RemoteServiceError
from utils.identity import IdentityService
from utils.logging_config import setup_logging

# Import controllers
from controllers.auth_controller import auth_bp
from controllers.dashboard_controller import dashboard_bp
from controllers.api_controller import api_bp

from controllers.users_controller import users_bp
from controllers.sellers_controller import sellers_bp
from controllers.staff_controller import staff_bp
from controllers.attendance_controller import attendance_bp
from controllers.orders_controller import orders_bp
from controllers.rooms_controller import rooms_bp
from controllers.services_controller import services_bp
from controllers.minimart_controller import minimart_bp
from controllers.activities_controller import activities_bp

BLUEPRINTS = [
    auth_bp,
    dashboard_bp,
    api_bp,
    users_bp,
    sellers_bp,
    staff_bp,
    attendance_bp,
    orders_bp,
    rooms_bp,
    services_bp,
    minimart_bp,
    activities_bp,
]

# Reachable without a session
PUBLIC_ENDPOINTS = ["auth.login", "auth.logout", "static"]


def create_app(config_object=Config, db=None, identity=None, uploader=None):
    """
    Build the console. The database handle, identity service and image
    uploader can be passed in; otherwise they are built from the config.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    logger = setup_logging("admin", app.config.get("LOG_LEVEL", "INFO"), app.config.get("LOG_FILE"))

    if db is None:
        db = init_db_connection(app)

    if identity is None:
        identity = IdentityService(db, app.config.get("SESSION_TTL_HOURS", 24))
        try:
            identity.ensure_indexes()
        except RemoteServiceError as e:
            logger.warning("Could not create the session expiry index: %s", e)

    app.extensions[EXTENSION_KEY] = {
        "db": db,
        "identity": identity,
        "uploader": uploader or ImageUploader.from_config(app.config),
    }

    for bp in BLUEPRINTS:
        app.register_blueprint(bp)

    # Exposes the signed-in admin to every template as {{ current_admin }}
    @app.context_processor
    def inject_admin():
        if request.endpoint == "static":
            return {}
        return dict(current_admin=current_gate().account)

    # Block every route except login/logout until an allow-listed admin is signed in
    @app.before_request
    def require_login():
        if request.endpoint in PUBLIC_ENDPOINTS:
            return None
        if current_gate().authenticated:
            return None
        if request.path.startswith("/api/"):
            return jsonify({"error": "Unauthorized"}), 401
        return redirect(url_for("auth.login"))

    if not app.config.get("ADMIN_EMAILS"):
        logger.warning("ADMIN_EMAILS is empty; nobody can sign in")

    return app


# Run the app
if __name__ == "__main__":
    create_app().run(debug=True)
