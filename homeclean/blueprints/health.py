# homeclean/blueprints/health.py
"""
Healthcheck for the hosting platform.
Always answers 200; "database" tells whether MongoDB answered a ping.
"""

from flask import Blueprint, jsonify, current_app

health = Blueprint("health", __name__)


@health.get("/health")
def get_health():
    cfg = current_app.config
    db = cfg.get("DATABASE")
    return jsonify(
        {
            "ok": True,
            "env": cfg.get("CONFIG_NAME", "dev"),
            "dry_run": bool(cfg.get("DRY_RUN", False)),
            "database": "up" if db is not None and db.ping() else "down",
        }
    )
