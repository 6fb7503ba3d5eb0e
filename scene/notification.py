"""
Email notification module using Jinja2 templates

Templates live in templates/notifications; the subject line of each email is
taken from the template's <title> tag.
"""

import html
import re

from flask import render_template, current_app

from scene.email import send_email, email_enabled, EmailError
from scene.models.attendee import Attendee, STATUS_UNPAID


def send_notification_email(to_email: str, template_name: str, **template_vars) -> bool:
    """
    Send a notification email using a Jinja2 template

    Args:
        to_email (str): Recipient email address
        template_name (str): Name of the email template to use (without .html extension)
        **template_vars: Variables to pass to the template

    Raises:
        EmailError: If the template has no subject or email sending fails
    """
    html_content = render_template(f"notifications/{template_name}.html", **template_vars)

    subject = _extract_subject_from_html(html_content)
    if not subject:
        raise EmailError(f"Could not extract subject from template '{template_name}'. Make sure the template has a <title> tag.")

    return send_email(to_email, subject, html_content)


def _extract_subject_from_html(html_content: str) -> str:
    title_match = re.search(r'<title>(.*?)</title>', html_content, re.DOTALL | re.IGNORECASE)
    if title_match:
        return html.unescape(title_match.group(1).strip())
    return ""


def send_payment_reminder(attendee, event) -> bool:
    """
    Remind an attendee that their ticket is still unpaid

    Args:
        attendee: Attendee model instance in 'unpaid' status
        event: Event the attendee registered for
    """
    return send_notification_email(
        to_email=attendee.email,
        template_name="payment_reminder",
        name=attendee.name,
        event=event,
        price=event.effective_price,
        payment_instructions=event.payment_instructions,
    )


def send_payment_reminders(event):
    """
    Send payment reminders to every unpaid attendee of an event.

    When email is not configured the reminders are only logged.

    Returns:
        tuple: (number of unpaid attendees, number of emails actually sent)
    """
    unpaid_attendees = list(Attendee.select().where(
        (Attendee.event == event) & (Attendee.status == STATUS_UNPAID)
    ))

    current_app.logger.info(f"Sending reminders to {len(unpaid_attendees)} attendees of event {event.id}")

    if not email_enabled():
        current_app.logger.warning("MAILTRAP_API_TOKEN not set, payment reminders were not emailed")
        return len(unpaid_attendees), 0

    sent = 0
    for attendee in unpaid_attendees:
        try:
            send_payment_reminder(attendee, event)
            sent += 1
        except EmailError as e:
            current_app.logger.error(f"Failed to send payment reminder to {attendee.email}: {e}")

    return len(unpaid_attendees), sent
