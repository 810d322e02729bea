"""
project: mazegen
module: server.py
License: MIT

Flask application factory and server entry point.

The web layer is a thin read-only consumer of the generator: it builds
dungeons on request and serves the region grid as JSON. Configuration comes
from environment variables (optionally loaded from a .env file) with the same
DUNGEON_* keys the CLI honours.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv
from flask import Flask, jsonify

from mazegen.dungeon.config import GeneratorConfig
from mazegen.logging_utils import ROOT_LOGGER, StructuredFormatter

# Load .env if present so DUNGEON_* defaults can be supplied without exporting shell variables.
load_dotenv()


def create_app(config_overrides=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # read-only installs still serve requests; only the log file is lost
        pass
    app.config.update(
        DUNGEON_DEFAULTS=GeneratorConfig.from_env(),
        DUNGEON_ENABLE_GENERATION_METRICS=bool(os.getenv("DUNGEON_ENABLE_GENERATION_METRICS", "1") == "1"),
    )
    if config_overrides:
        app.config.update(config_overrides)

    from mazegen.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    @app.errorhandler(404)
    def _not_found(_err):
        return jsonify({"error": "not found"}), 404

    return app


def _configure_logging(app: Flask, level: int = logging.INFO):
    """Write every record to a rotating file and non-mazegen records to the console.

    mazegen's own records already reach the console through the structured
    handler in mazegen.logging_utils, so the root console handler skips them.
    The file (LOG_FILE, default instance/app.log) gets both, all rendered by
    StructuredFormatter. Handlers installed by an earlier call are replaced;
    foreign handlers are left alone.
    """
    log_path = app.config.get("LOG_FILE") or os.path.join(app.instance_path, "app.log")
    os.makedirs(os.path.dirname(log_path), exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    for h in [h for h in root.handlers if getattr(h, "_mazegen_managed", False)]:
        root.removeHandler(h)
        h.close()

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=app.config.get("LOG_MAX_BYTES", 1_000_000),
        backupCount=app.config.get("LOG_BACKUPS", 3),
    )
    file_handler.setFormatter(StructuredFormatter())

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    console.addFilter(lambda record: not record.name.startswith(ROOT_LOGGER))

    for h in (file_handler, console):
        h.setLevel(level)
        h._mazegen_managed = True
        root.addHandler(h)
    return log_path


def start_server(host: str, port: int, debug: bool = False):  # pragma: no cover - blocking
    app = create_app()
    _configure_logging(app)
    try:
        print(f"[INFO] Starting dungeon API on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)
