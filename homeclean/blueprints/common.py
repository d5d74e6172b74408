# homeclean/blueprints/common.py
"""
Helpers shared by the entity blueprints.
"""

from __future__ import annotations

from typing import Any, Dict

from flask import current_app, jsonify, request

from homeclean.db import Database
from homeclean.errors import ValidationError
from homeclean.notifier import Notifier


def get_db() -> Database:
    return current_app.config["DATABASE"]


def get_notifier() -> Notifier:
    return current_app.config["NOTIFIER"]


def json_body() -> Dict[str, Any]:
    """
    Parsed JSON object from the request.
    Malformed JSON, or a body that is not an object, is a ValidationError.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON")
    return data


def error(message: str, status: int):
    return jsonify({"error": message}), status
