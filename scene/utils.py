"""
Utility functions for scene

Request parsing helpers shared across the API blueprints.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from flask import request

from scene.errors import ValidationFailure

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

# Ticket prices are stored as DecimalField(max_digits=10, decimal_places=2)
MAX_TICKET_PRICE = Decimal(10) ** 8


def get_json_body():
    """Return the request's JSON object or raise ValidationFailure"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailure('Invalid JSON data')
    return data


def get_str(data, key, strip=True):
    """
    Read a string field from a JSON body.

    Missing and null fields read as ''. Any other non-string value raises
    ValidationFailure naming the field.
    """
    value = data.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationFailure(f'{key} must be a string')
    return value.strip() if strip else value


def get_bool(data, key):
    """Read a JSON boolean field; missing and null read as False"""
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationFailure(f'{key} must be true or false')
    return value


def is_valid_email(email):
    return bool(email) and bool(EMAIL_PATTERN.match(email.strip()))


def parse_datetime(value):
    """
    Parse an ISO-8601 timestamp into a naive UTC datetime.

    A trailing 'Z' is accepted. Timestamps with an offset are converted to UTC;
    timestamps without one are taken as already being UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_price(value):
    """Parse a non-negative ticket price below MAX_TICKET_PRICE, returning None when invalid"""
    if value is None or value == '':
        return Decimal('0')
    if isinstance(value, bool):
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        return None
    if not price.is_finite() or price < 0:
        return None
    try:
        price = price.quantize(Decimal('0.01'))
    except InvalidOperation:
        return None
    return price if price < MAX_TICKET_PRICE else None


def parse_positive_int(value):
    if isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(value, float) and value != number:
        return None
    return number if number > 0 else None
