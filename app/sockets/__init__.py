"""
Sockets Package
"""
from app.sockets.form_events import register_socket_events, broadcast_analytics, compute_form_analytics

__all__ = ['register_socket_events', 'broadcast_analytics', 'compute_form_analytics']
