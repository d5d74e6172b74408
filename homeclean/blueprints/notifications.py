# homeclean/blueprints/notifications.py
"""
POST /quote-notification

Called by the quote form after the quote itself was saved. Queues the
admin email and answers right away; delivery is never awaited.
"""

from flask import Blueprint, current_app, jsonify

from homeclean.blueprints.common import error, get_notifier, json_body
from homeclean.errors import ValidationError
from homeclean.forms import require
from homeclean.logging import get_logger

notifications = Blueprint("notifications", __name__)
logger = get_logger(__name__)


@notifications.post("/quote-notification")
def quote_notification():
    try:
        data = json_body()
        require(data, ("email",))
    except ValidationError as e:
        return error(e.message, 400)

    mailer = current_app.config["MAILER"]
    queued = get_notifier().submit(mailer.send_admin_new_quote, dict(data))
    logger.info("quotes.notification_requested", extra={"queued": queued})
    return jsonify({"queued": queued}), 202
