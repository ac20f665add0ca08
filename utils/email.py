# utils/email.py
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

import requests

from config import config

logger = logging.getLogger(__name__)

BREVO_URL = "https://api.brevo.com/v3/smtp/email"


class EmailError(Exception):
     """Brevo refused or failed to accept a message."""


def send_email(to_email: str, subject: str, html: str) -> bool:
     """
     Send one transactional email through Brevo.

     Returns False (and logs) when no API key is configured so local
     environments can run the automation job without sending mail.
     """
     if not config.BREVO_API_KEY:
          logger.warning("BREVO_API_KEY is not set, skipping email to %s: %s", to_email, subject)
          return False

     response = requests.post(
          BREVO_URL,
          headers={
               "api-key": config.BREVO_API_KEY,
               "Content-Type": "application/json",
          },
          json={
               "sender": {"name": config.EMAIL_SENDER_NAME, "email": config.EMAIL_SENDER_ADDRESS},
               "to": [{"email": to_email}],
               "subject": subject,
               "htmlContent": html,
          },
          timeout=10,
     )
     if response.status_code not in (200, 201, 202):
          raise EmailError(f"Brevo error: {response.text}")
     logger.info("Sent email to %s: %s", to_email, subject)
     return True


def send_rent_reminder(
     to_email: str,
     tenant_name: str,
     amount: Decimal,
     due_date: date,
     days_before: int,
     custom_message: Optional[str] = None,
) -> bool:
     day_word = "day" if days_before == 1 else "days"
     note = f"<p>{custom_message}</p>" if custom_message else ""
     return send_email(
          to_email,
          f"Rent reminder: ${amount:,.2f} due in {days_before} {day_word}",
          f"""
               <h2>Hi {tenant_name},</h2>
               <p>This is a friendly reminder that your payment of
               <strong>${amount:,.2f}</strong> is due on
               <strong>{due_date:%B %d, %Y}</strong>.</p>
               {note}
          """,
     )


def send_late_fee_notice(
     to_email: str,
     tenant_name: str,
     fee_amount: Decimal,
     original_amount: Decimal,
     due_date: date,
) -> bool:
     return send_email(
          to_email,
          f"Late fee of ${fee_amount:,.2f} applied",
          f"""
               <h2>Hi {tenant_name},</h2>
               <p>Your payment of <strong>${original_amount:,.2f}</strong> due on
               <strong>{due_date:%B %d, %Y}</strong> has not been received.</p>
               <p>A late fee of <strong style="color:#F28D35">${fee_amount:,.2f}</strong>
               has been added to your balance.</p>
          """,
     )
