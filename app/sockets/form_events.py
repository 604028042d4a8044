"""
Socket.IO Event Handlers
Live analytics for authors watching a form's responses page
"""
import logging

from flask import request
from flask_socketio import emit, join_room, leave_room
from app.extensions import db, socketio
from app.models import Form, Response
from app.services import AnalyticsService
from app.utils import analytics_timezone

logger = logging.getLogger(__name__)

# form_id -> set of socket ids watching that form
form_watchers = {}


def form_room(form_id):
    return f'form_{form_id}'


def compute_form_analytics(form_id):
    """Fresh analytics for a form from its current responses"""
    responses = Response.query.filter_by(form_id=form_id).all()
    return AnalyticsService.build_analytics(responses, tz=analytics_timezone())


def broadcast_analytics(form_id):
    """Push recomputed analytics to everyone watching the form"""
    analytics = compute_form_analytics(form_id)
    socketio.emit(
        'analytics_updated',
        {'formId': form_id, 'analytics': analytics.to_dict()},
        room=form_room(form_id)
    )
    return analytics


def _parse_form_id(data):
    try:
        return int((data or {}).get('formId'))
    except (TypeError, ValueError):
        return None


def register_socket_events():
    """Register all Socket.IO event handlers"""

    @socketio.on('watch_form')
    def watch_form(data):
        """Author opens a form's responses page"""
        form_id = _parse_form_id(data)
        if form_id is None or db.session.get(Form, form_id) is None:
            emit('watch_error', {'message': 'Form not found'})
            return

        join_room(form_room(form_id))
        form_watchers.setdefault(form_id, set()).add(request.sid)
        logger.info('Socket %s watching form %s', request.sid, form_id)
        emit('update_watchers', {'count': len(form_watchers[form_id])}, room=form_room(form_id))

        analytics = compute_form_analytics(form_id)
        emit('analytics_updated', {'formId': form_id, 'analytics': analytics.to_dict()})

    @socketio.on('unwatch_form')
    def unwatch_form(data):
        """Author leaves a form's responses page"""
        form_id = _parse_form_id(data)
        if form_id is None:
            return
        leave_room(form_room(form_id))
        form_watchers.get(form_id, set()).discard(request.sid)
        emit('update_watchers', {'count': len(form_watchers.get(form_id, ()))}, room=form_room(form_id))

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Forget the socket in every form it was watching"""
        for sids in form_watchers.values():
            sids.discard(request.sid)
