"""
Outgoing email through the Mailtrap sending API

Only payment reminders go out by email. When MAILTRAP_API_TOKEN is unset the
notification layer skips sending altogether (see email_enabled).
"""

import os
import re
import requests
from typing import Optional
from flask import current_app

MAILTRAP_URL = "https://send.api.mailtrap.io/api/send"
SENDER_NAME = "Scene Events"

# Reserved documentation domains; guests registered with these are never mailed
UNDELIVERABLE_DOMAINS = ("example.com", "example.net")


class EmailError(Exception):
    """Mailtrap rejected the message or could not be reached"""
    pass


def email_enabled() -> bool:
    return bool(os.getenv('MAILTRAP_API_TOKEN'))


def send_email(to_email: str, subject: str, body: str, from_email: Optional[str] = None) -> bool:
    """
    Deliver one HTML message, with a plain-text part derived from it.

    Addresses on UNDELIVERABLE_DOMAINS are reported as delivered without a
    request being made. Raises EmailError on a missing token, a network
    failure or any non-200 reply.
    """
    if to_email.lower().endswith(UNDELIVERABLE_DOMAINS):
        return True

    api_token = os.getenv('MAILTRAP_API_TOKEN')
    if not api_token:
        raise EmailError("MAILTRAP_API_TOKEN is not set")

    payload = {
        "from": {"email": from_email or os.getenv('MAILTRAP_FROM_EMAIL', 'noreply@scene.events'),
                 "name": SENDER_NAME},
        "to": [{"email": to_email}],
        "subject": subject,
        "html": body,
        "text": html_to_text(body),
    }

    try:
        response = requests.post(
            MAILTRAP_URL,
            json=payload,
            headers={"Authorization": f"Bearer {api_token}", "Content-Type": "application/json"},
            timeout=30,
        )
    except requests.exceptions.RequestException as e:
        current_app.logger.error(f"Mailtrap unreachable while mailing {to_email}: {e}")
        raise EmailError(f"Could not reach Mailtrap: {e}")

    if response.status_code != 200:
        current_app.logger.error(f"Mailtrap refused mail to {to_email} ({response.status_code}): {response.text}")
        raise EmailError(f"Mailtrap returned {response.status_code}")

    current_app.logger.info(f"Mailed '{subject}' to {to_email}")
    return True


def html_to_text(html_content: str) -> str:
    """Drop tags and collapse blank runs for the text/plain alternative"""
    text = re.sub(r'<.*?>', '', html_content, flags=re.DOTALL)
    text = re.sub(r'\n\s*\n', '\n\n', text)
    return text.strip()
