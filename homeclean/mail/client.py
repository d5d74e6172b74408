from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from markupsafe import escape

from homeclean.errors import NotificationError, StoreError
from homeclean.http import HttpClient
from homeclean.logging import get_logger, mask_email
from homeclean.models import EmailLogRepository

logger = get_logger(__name__)

BOOKING_FIELDS = (
    ("Name", "name"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("Date", "date"),
    ("Time", "time"),
    ("Service", "service"),
    ("Location", "location"),
    ("Payment method", "paymentMethod"),
)

QUOTE_FIELDS = (
    ("Name", "name"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("Address", "address"),
    ("Service area", "serviceArea"),
    ("Service type", "serviceType"),
    ("Property type", "propertyType"),
    ("Square footage", "squareFootage"),
    ("Adults", "adults"),
    ("Kids", "kids"),
    ("Pets", "pets"),
    ("Service level", "serviceLevel"),
    ("Kitchens", "kitchens"),
    ("Full bathrooms", "fullBathrooms"),
    ("Half bathrooms", "halfBathrooms"),
    ("Walk-in showers", "walkInShowers"),
    ("Large oval tubs", "largeOvalTubs"),
    ("Double sinks", "doubleSinks"),
    ("Basement", "basement"),
    ("Dusting", "dusting"),
    ("Comments", "comments"),
)


def render_table(title: str, fields, data: Dict[str, Any]) -> str:
    rows = "".join(
        f"<tr><td><b>{escape(label)}</b></td><td>{escape(data.get(key) or '-')}</td></tr>"
        for label, key in fields
    )
    return f"<html><body><h2>{escape(title)}</h2><table>{rows}</table></body></html>"


class Mailer:
    """
    Sends transactional email through an HTTP API (Resend-style payload)
    and records every attempt in the email log.
    """

    def __init__(
        self,
        http: HttpClient,
        email_logs: EmailLogRepository,
        *,
        api_url: str,
        api_key: Optional[str],
        sender: str,
        admin_email: Optional[str] = None,
        dry_run: bool = False,
    ):
        self.http = http
        self.email_logs = email_logs
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.admin_email = admin_email
        self.dry_run = dry_run

    @classmethod
    def from_settings(cls, cfg, email_logs: EmailLogRepository) -> "Mailer":
        http = HttpClient(timeout=int(cfg.get("HTTP_TIMEOUT", 15)))
        return cls(
            http,
            email_logs,
            api_url=cfg.get("EMAIL_API_URL", "https://api.resend.com/emails"),
            api_key=cfg.get("EMAIL_API_KEY"),
            sender=cfg.get("EMAIL_FROM", ""),
            admin_email=cfg.get("ADMIN_EMAIL"),
            dry_run=bool(cfg.get("DRY_RUN", False)),
        )

    def _record(self, to: str, subject: str, html: str, sent: bool, error: Optional[str]) -> None:
        try:
            self.email_logs.create(to=to, subject=subject, html=html, sent=sent, error=error)
        except StoreError as e:
            # the email outcome stands even if the audit write fails
            logger.warning("mail.log_failed", extra={"to": mask_email(to), "error": str(e)})

    def send(self, to: str, subject: str, html: str) -> Dict[str, Any]:
        """
        Delivers one email. Raises NotificationError when the API call fails;
        the attempt is recorded either way.
        """
        if self.dry_run or not self.api_key:
            logger.info(
                "mail.dry_run",
                extra={"to": mask_email(to), "subject": subject, "has_api_key": bool(self.api_key)},
            )
            self._record(to, subject, html, sent=False, error="dry_run")
            return {"dry_run": True}

        payload = {"from": self.sender, "to": [to], "subject": subject, "html": html}
        try:
            result = self.http.post_json(
                self.api_url,
                payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except requests.RequestException as e:
            logger.error("mail.failed", extra={"to": mask_email(to), "subject": subject, "error": str(e)})
            self._record(to, subject, html, sent=False, error=str(e))
            raise NotificationError(f"email delivery failed: {e}") from e

        logger.info("mail.sent", extra={"to": mask_email(to), "subject": subject, "provider_id": result.get("id")})
        self._record(to, subject, html, sent=True, error=None)
        return result

    def _admin_send(self, subject: str, html: str) -> Dict[str, Any]:
        if not self.admin_email:
            logger.warning("mail.no_admin_email", extra={"subject": subject})
            raise NotificationError("ADMIN_EMAIL is not configured")
        return self.send(self.admin_email, subject, html)

    def send_admin_new_booking(self, booking: Dict[str, Any]) -> Dict[str, Any]:
        subject = f"New booking: {booking.get('name', '')} on {booking.get('date', '')} at {booking.get('time', '')}"
        html = render_table("New booking received", BOOKING_FIELDS, booking)
        if booking.get("whatsapp"):
            html = html.replace("</table>", "</table><p>Customer prefers updates via WhatsApp.</p>")
        return self._admin_send(subject, html)

    def send_admin_new_quote(self, quote: Dict[str, Any]) -> Dict[str, Any]:
        subject = f"New quote request from {quote.get('email', '')}"
        html = render_table("New quote request", QUOTE_FIELDS, quote)
        return self._admin_send(subject, html)
