from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from .cli import register_commands
from models import storage

API_PREFIX = "/api/v1"

SWAGGER_TEMPLATE = {
    "swagger": "2.0.0",
    "info": {
        "title": "Bookstore DB Reports",
        "version": "1.0.0",
        "description": "Read-only reports over the bookstore catalog, customers and orders.",
    },
    "basePath": "/",
    "schemes": ["http"],
}

# /swagger.json + UI at /apidocs
SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: rule.rule.startswith(API_PREFIX),
            "model_filter": lambda tag: True,
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory.
    Mounts health and reports under /api/v1 and adds the
    init-db / seed-db / grant-roles / setup-db commands to the flask CLI.
    """
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)
    register_error_handlers(app)
    register_commands(app)

    from .health import bp as health_bp
    from .reports import bp as reports_bp

    app.register_blueprint(health_bp, url_prefix=API_PREFIX)
    app.register_blueprint(reports_bp, url_prefix=f"{API_PREFIX}/reports")

    @app.teardown_appcontext
    def remove_session(exception=None):
        # scoped_session.remove(); one session per request / CLI command
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Bookstore DB Reports",
            "docs": "/apidocs/",
            "health": f"{API_PREFIX}/health",
        }, 200

    return app
