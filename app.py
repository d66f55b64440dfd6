"""
Flask app for the Slack /otk slash command.

Deploy to Railway, Render, Fly.io, or similar. For AWS Lambda, wrap
handler.handle_request with the serverless adapter of your choice.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request

from config import Settings, configure_logging
from errors import ConfigError
from handler import handle_request

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app. Settings are read from the environment when not given."""
    if settings is None:
        load_dotenv()
        settings = Settings.from_env()
        configure_logging(settings.log_level)

    try:
        settings.validate()
    except ConfigError as e:
        # Still serve /health; slash commands will fail until secrets are set.
        logger.warning("%s", e)

    app = Flask(__name__)

    @app.route("/", methods=["GET"])
    def index():
        """Root route - confirms app is running."""
        return jsonify({
            "app": "otk-please",
            "status": "running",
            "endpoints": {
                "health": "/health",
                "slash_command": "POST /slack/otk",
            },
        }), 200

    @app.route("/slack/otk", methods=["POST"])
    def slack_otk():
        """Handle Slack slash command POST."""
        # Read once; verification and parsing share these bytes.
        body = request.get_data()
        result = handle_request(request.headers, body, settings)
        return Response(result.body, status=result.status, content_type=result.content_type)

    @app.route("/health", methods=["GET"])
    def health():
        """Health check for load balancers."""
        return jsonify({"status": "ok"}), 200

    return app


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    create_app().run(host="0.0.0.0", port=port)
