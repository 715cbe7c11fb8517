"""
Run the reports API in development: python -m api
Create the schema first with `flask --app api setup-db`.
"""
import logging
import os

from . import create_app

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()

if __name__ == "__main__":
    # production goes through a WSGI server instead
    host = os.getenv("FLASK_RUN_HOST", "127.0.0.1")
    port = int(os.getenv("FLASK_RUN_PORT", "8000"))
    app.run(host=host, port=port, debug=app.config.get("DEBUG", False))
