"""
Helper Functions
Utility functions used across the application
"""
from datetime import datetime, timezone
from flask import request, current_app
import re
import time
import pytz


def now_utc():
    """Get current UTC timestamp"""
    return datetime.now(timezone.utc)


def analytics_timezone():
    """Timezone used to bucket responses by calendar day"""
    name = current_app.config.get('ANALYTICS_TIMEZONE') or 'UTC'
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        current_app.logger.warning('Unknown ANALYTICS_TIMEZONE %r, using UTC', name)
        return pytz.utc


def generate_slug(title):
    """URL-safe slug from the title plus a millisecond timestamp"""
    base = re.sub(r'[^a-z0-9]', '-', (title or '').lower())
    base = re.sub(r'-+', '-', base).strip('-')
    millis = int(time.time() * 1000)
    return f'{base}-{millis}' if base else str(millis)


def is_http_url(value):
    return bool(re.match(r'^https?://.+', value or ''))


def client_ip():
    """Remote address, honouring the first X-Forwarded-For hop"""
    forwarded = request.headers.get('X-Forwarded-For', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or ''


def get_json_body():
    """Request JSON body as a dict ({} when absent or not an object)"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
