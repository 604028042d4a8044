"""
Response Routes
Submission (scored at submit time), retrieval, deletion, analytics
"""
import logging
import math

from flask import Blueprint, jsonify, request
from app.errors import ConflictError, NotFoundError, ValidationError
from app.extensions import db
from app.models import Form, Response, answers_from_list
from app.services import ScoringService
from app.sockets import broadcast_analytics, compute_form_analytics
from app.utils import client_ip, get_json_body, now_utc

logger = logging.getLogger(__name__)

responses_bp = Blueprint('responses', __name__)


def validate_submission(data):
    errors = []

    form_slug = data.get('formSlug')
    if not isinstance(form_slug, str) or not form_slug.strip():
        errors.append('Form slug is required')

    if not isinstance(data.get('answers'), list):
        errors.append('Answers must be an array')

    completion_time = data.get('completionTime', 0)
    if completion_time is not None and (
        isinstance(completion_time, bool)
        or not isinstance(completion_time, (int, float))
        or not math.isfinite(completion_time)
    ):
        errors.append('completionTime must be a number')

    if errors:
        raise ValidationError('Validation failed', errors=errors)

    return form_slug.strip()


def get_response_or_404(response_id):
    response = db.session.get(Response, response_id)
    if response is None:
        raise NotFoundError('Response not found')
    return response


@responses_bp.route('', methods=['POST'])
def submit_response():
    """
    Submit an answer set against a published form

    The form must exist and be published before anything is scored.
    The score is computed once, against the questions as they are now,
    and stored verbatim.
    """
    data = get_json_body()
    form_slug = validate_submission(data)

    form = Form.query.filter_by(slug=form_slug, is_published=True).first()
    if form is None:
        raise NotFoundError('Form not found or not published')

    session_id = data.get('sessionId') or ''
    if not isinstance(session_id, str):
        session_id = str(session_id)

    if session_id and not form.allows_multiple_submissions:
        already = Response.query.filter_by(form_id=form.id, session_id=session_id).first()
        if already is not None:
            raise ConflictError('A response has already been submitted for this form')

    # Snapshot of the definitions; no re-fetch while scoring
    questions = form.get_question_definitions()
    result = ScoringService.calculate_score(answers_from_list(data['answers']), questions)

    response = Response(
        form_id=form.id,
        form_slug=form_slug,
        answers=data['answers'],
        score=result.score,
        max_score=result.max_score,
        completion_time=data.get('completionTime') or 0,
        is_complete=True,
        submitted_at=now_utc(),
        user_agent=request.headers.get('User-Agent', ''),
        ip_address=client_ip(),
        session_id=session_id,
    )
    db.session.add(response)
    db.session.commit()

    logger.info(
        'Response %s submitted for %s: %d/%d',
        response.id, form_slug, result.score, result.max_score
    )
    broadcast_analytics(form.id)

    return jsonify({
        'message': 'Response submitted successfully',
        'responseId': response.id,
        'score': result.score,
        'maxScore': result.max_score,
        'thankYouMessage': form.thank_you_message,
    }), 201


@responses_bp.route('/<int:response_id>', methods=['GET'])
def get_response(response_id):
    return jsonify(get_response_or_404(response_id).to_dict(include_form_title=True))


@responses_bp.route('/form/<slug>', methods=['GET'])
def responses_by_slug(slug):
    """All responses submitted under a slug, newest first"""
    responses = Response.query.filter_by(form_slug=slug)\
        .order_by(Response.submitted_at.desc(), Response.id.desc()).all()
    return jsonify([r.to_dict(include_form_title=True) for r in responses])


@responses_bp.route('/<int:response_id>', methods=['DELETE'])
def delete_response(response_id):
    response = get_response_or_404(response_id)
    form_id = response.form_id
    db.session.delete(response)
    db.session.commit()

    logger.info('Deleted response %s of form %s', response_id, form_id)
    broadcast_analytics(form_id)
    return jsonify({'message': 'Response deleted successfully'})


@responses_bp.route('/analytics/<int:form_id>', methods=['GET'])
def analytics(form_id):
    """Analytics recomputed from the form's current responses"""
    if db.session.get(Form, form_id) is None:
        raise NotFoundError('Form not found')

    return jsonify(compute_form_analytics(form_id).to_dict())
