# homeclean/blueprints/bookings.py
"""
Bookings endpoints (/bookings).

- GET    /bookings        -> list, newest first
- POST   /bookings        -> create + admin email (fire-and-forget)
- DELETE /bookings        -> clear every booking
- GET    /bookings/<id>
- PATCH  /bookings/<id>   -> {"status": "pending|confirmed|cancelled"}
- DELETE /bookings/<id>
"""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from homeclean.blueprints.common import error, get_db, get_notifier, json_body
from homeclean.errors import StoreError, ValidationError
from homeclean.forms import booking_input
from homeclean.logging import get_logger, mask_email
from homeclean.models import BOOKING_STATUSES, BookingRepository

bookings = Blueprint("bookings", __name__)
logger = get_logger(__name__)


@bookings.get("/bookings")
def list_bookings():
    try:
        db = get_db()
        db.ensure_indexes()
        items = BookingRepository(db).list()
        return jsonify({"bookings": items})
    except StoreError:
        logger.exception("bookings.list_error")
        return error("Failed to fetch bookings", 500)


@bookings.post("/bookings")
def create_booking():
    try:
        data = booking_input(json_body())
    except ValidationError as e:
        logger.warning("bookings.invalid", extra={"error": e.message})
        return error(e.message, 400)

    try:
        db = get_db()
        db.ensure_indexes()
        created = BookingRepository(db).create(data)
    except StoreError:
        logger.exception("bookings.create_error", extra={"email": mask_email(data.get("email"))})
        return error("Failed to create booking", 500)

    # 201 is returned whatever happens to the email
    mailer = current_app.config["MAILER"]
    get_notifier().submit(mailer.send_admin_new_booking, dict(created))

    return jsonify({"booking": created}), 201


@bookings.delete("/bookings")
def clear_bookings():
    try:
        db = get_db()
        db.ensure_indexes()
        deleted = BookingRepository(db).delete_all()
        return jsonify({"success": True, "deleted": deleted})
    except StoreError:
        logger.exception("bookings.clear_error")
        return error("Failed to delete bookings", 500)


@bookings.get("/bookings/<booking_id>")
def get_booking(booking_id: str):
    try:
        found = BookingRepository(get_db()).get_by_id(booking_id)
    except StoreError:
        logger.exception("bookings.get_error", extra={"id": booking_id})
        return error("Failed to fetch booking", 500)
    if found is None:
        return error("Booking not found", 404)
    return jsonify({"booking": found})


@bookings.patch("/bookings/<booking_id>")
def update_booking_status(booking_id: str):
    try:
        status = json_body().get("status")
    except ValidationError as e:
        return error(e.message, 400)

    if status not in BOOKING_STATUSES:
        return error("Invalid status", 400)

    try:
        updated = BookingRepository(get_db()).update_status(booking_id, status)
    except StoreError:
        logger.exception("bookings.update_error", extra={"id": booking_id})
        return error("Failed to update booking", 500)

    if updated is None:
        return error("Booking not found", 404)
    return jsonify({"booking": updated})


@bookings.delete("/bookings/<booking_id>")
def delete_booking(booking_id: str):
    try:
        db = get_db()
        db.ensure_indexes()
        deleted = BookingRepository(db).delete(booking_id)
    except StoreError:
        logger.exception("bookings.delete_error", extra={"id": booking_id})
        return error("Failed to delete booking", 500)

    if not deleted:
        return error("Booking not found", 404)
    return jsonify({"success": True, "message": "Booking deleted"})
