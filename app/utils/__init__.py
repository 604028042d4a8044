"""
Utils Package
"""
from app.utils.helpers import (
    now_utc,
    analytics_timezone,
    generate_slug,
    is_http_url,
    client_ip,
    get_json_body
)

__all__ = [
    'now_utc',
    'analytics_timezone',
    'generate_slug',
    'is_http_url',
    'client_ip',
    'get_json_body'
]
