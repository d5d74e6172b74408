# homeclean/blueprints/quotes.py
"""
Quote request endpoints (/quotes).

- GET    /quotes
- POST   /quotes
- GET    /quotes/<id>
- PATCH  /quotes/<id>   -> {"status": "pending|reviewed|contacted"}
- DELETE /quotes/<id>
"""

from __future__ import annotations

from flask import Blueprint, jsonify

from homeclean.blueprints.common import error, get_db, json_body
from homeclean.errors import StoreError, ValidationError
from homeclean.forms import quote_input
from homeclean.logging import get_logger, mask_email
from homeclean.models import QUOTE_STATUSES, QuoteRepository

quotes = Blueprint("quotes", __name__)
logger = get_logger(__name__)


@quotes.get("/quotes")
def list_quotes():
    try:
        db = get_db()
        db.ensure_indexes()
        return jsonify({"quotes": QuoteRepository(db).list()})
    except StoreError:
        logger.exception("quotes.list_error")
        return error("Failed to fetch quotes", 500)


@quotes.post("/quotes")
def create_quote():
    try:
        data = quote_input(json_body())
    except ValidationError as e:
        logger.warning("quotes.invalid", extra={"error": e.message})
        return error(e.message, 400)

    try:
        created = QuoteRepository(get_db()).create(data)
    except StoreError:
        logger.exception("quotes.create_error", extra={"email": mask_email(data.get("email"))})
        return error("Failed to create quote", 500)

    return jsonify({"quote": created}), 201


@quotes.get("/quotes/<quote_id>")
def get_quote(quote_id: str):
    try:
        found = QuoteRepository(get_db()).get_by_id(quote_id)
    except StoreError:
        logger.exception("quotes.get_error", extra={"id": quote_id})
        return error("Failed to fetch quote", 500)
    if found is None:
        return error("Quote not found", 404)
    return jsonify({"quote": found})


@quotes.patch("/quotes/<quote_id>")
def update_quote_status(quote_id: str):
    try:
        status = json_body().get("status")
    except ValidationError as e:
        return error(e.message, 400)

    if status not in QUOTE_STATUSES:
        return error("Invalid status", 400)

    try:
        updated = QuoteRepository(get_db()).update_status(quote_id, status)
    except StoreError:
        logger.exception("quotes.update_error", extra={"id": quote_id})
        return error("Failed to update quote", 500)

    if updated is None:
        return error("Quote not found", 404)
    return jsonify({"quote": updated})


@quotes.delete("/quotes/<quote_id>")
def delete_quote(quote_id: str):
    try:
        db = get_db()
        db.ensure_indexes()
        deleted = QuoteRepository(db).delete(quote_id)
    except StoreError:
        logger.exception("quotes.delete_error", extra={"id": quote_id})
        return error("Failed to delete quote", 500)

    if not deleted:
        return error("Quote not found", 404)
    return jsonify({"success": True, "message": "Quote deleted"})
