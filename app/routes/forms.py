"""
Form Routes
Form CRUD, publishing, and per-form responses/analytics
"""
import logging

from flask import Blueprint, jsonify
from sqlalchemy import func
from app.errors import NotFoundError, ValidationError
from app.extensions import db
from app.models import Form, Response, validate_questions
from app.models.form import DEFAULT_SETTINGS
from app.sockets import compute_form_analytics
from app.utils import generate_slug, get_json_body, is_http_url

logger = logging.getLogger(__name__)

forms_bp = Blueprint('forms', __name__)

SETTING_TYPES = {
    'allowMultipleSubmissions': (bool, 'boolean'),
    'showProgressBar': (bool, 'boolean'),
    'thankYouMessage': (str, 'string'),
    'redirectUrl': (str, 'string'),
}


def get_form_or_404(form_id):
    form = db.session.get(Form, form_id)
    if form is None:
        raise NotFoundError('Form not found')
    return form


def unique_slug(title):
    """Generated slug, suffixed until no other form uses it"""
    slug = generate_slug(title)
    candidate = slug
    suffix = 1
    while Form.query.filter_by(slug=candidate).first() is not None:
        suffix += 1
        candidate = f'{slug}-{suffix}'
    return candidate


def validate_form_fields(data, partial=False):
    """
    Validate author-supplied form fields

    Args:
        data: request body
        partial: only validate the fields that are present (updates)

    Returns:
        list: parsed questions ([] when not supplied)
    """
    errors = []

    if not partial or 'title' in data:
        title = data.get('title')
        if not isinstance(title, str) or not title.strip():
            errors.append('Title is required' if not partial else 'Title cannot be empty')

    header_image = data.get('headerImage')
    if header_image not in (None, ''):
        if not isinstance(header_image, str) or (header_image.strip() and not is_http_url(header_image)):
            errors.append('Header image must be a valid URL')

    for field in ('description', 'createdBy'):
        if data.get(field) is not None and not isinstance(data[field], str):
            errors.append(f'{field} must be a string')

    settings = data.get('settings')
    if settings is not None:
        if not isinstance(settings, dict):
            errors.append('settings must be an object')
        else:
            for key, value in settings.items():
                if key not in SETTING_TYPES:
                    continue
                expected, name = SETTING_TYPES[key]
                if not isinstance(value, expected):
                    errors.append(f'settings.{key} must be a {name}')

    if 'isPublished' in data and not isinstance(data['isPublished'], bool):
        errors.append('isPublished must be a boolean')

    if errors:
        raise ValidationError('Validation failed', errors=errors)

    return validate_questions(data.get('questions'))


def merged_settings(current, incoming):
    settings = dict(DEFAULT_SETTINGS)
    settings.update(current or {})
    for key, value in (incoming or {}).items():
        if key in DEFAULT_SETTINGS:
            settings[key] = value
    return settings


@forms_bp.route('', methods=['GET'])
def list_forms():
    """All forms, newest first, with response counts"""
    counts = dict(
        db.session.query(Response.form_id, func.count(Response.id))
        .group_by(Response.form_id)
        .all()
    )
    forms = Form.query.order_by(Form.created_at.desc(), Form.id.desc()).all()

    payload = []
    for form in forms:
        data = form.to_dict(summary=True)
        data['responseCount'] = counts.get(form.id, 0)
        payload.append(data)
    return jsonify(payload)


@forms_bp.route('/<int:form_id>', methods=['GET'])
def get_form(form_id):
    return jsonify(get_form_or_404(form_id).to_dict())


@forms_bp.route('/slug/<slug>', methods=['GET'])
def get_form_by_slug(slug):
    """Public access: published forms only"""
    form = Form.query.filter_by(slug=slug, is_published=True).first()
    if form is None:
        raise NotFoundError('Form not found or not published')
    return jsonify(form.to_dict())


@forms_bp.route('', methods=['POST'])
def create_form():
    data = get_json_body()
    questions = validate_form_fields(data)

    title = data['title'].strip()
    form = Form(
        title=title,
        description=(data.get('description') or '').strip(),
        header_image=data.get('headerImage') or '',
        questions=[q.to_dict() for q in questions],
        settings=merged_settings({}, data.get('settings')),
        is_published=False,
        created_by=data.get('createdBy') or 'anonymous',
        slug=unique_slug(title),
    )
    db.session.add(form)
    db.session.commit()

    logger.info('Created form %s (%s) with %d questions', form.id, form.slug, len(questions))
    return jsonify(form.to_dict()), 201


@forms_bp.route('/<int:form_id>', methods=['PUT'])
def update_form(form_id):
    form = get_form_or_404(form_id)
    data = get_json_body()
    questions = validate_form_fields(data, partial=True)

    if 'title' in data:
        form.title = data['title'].strip()
    if 'description' in data:
        form.description = (data.get('description') or '').strip()
    if 'headerImage' in data:
        form.header_image = data.get('headerImage') or ''
    if 'questions' in data:
        # Existing responses keep the score they were given at submission
        form.questions = [q.to_dict() for q in questions]
    if 'settings' in data:
        form.settings = merged_settings(form.settings, data.get('settings'))
    if 'isPublished' in data:
        form.is_published = data['isPublished']
    if 'createdBy' in data:
        form.created_by = data.get('createdBy') or 'anonymous'

    db.session.commit()
    logger.info('Updated form %s', form.id)
    return jsonify(form.to_dict())


@forms_bp.route('/<int:form_id>', methods=['DELETE'])
def delete_form(form_id):
    """Delete a form and all of its responses"""
    form = get_form_or_404(form_id)
    deleted = Response.query.filter_by(form_id=form.id).delete()
    db.session.delete(form)
    db.session.commit()

    logger.info('Deleted form %s and %d responses', form_id, deleted)
    return jsonify({'message': 'Form deleted successfully'})


@forms_bp.route('/<int:form_id>/publish', methods=['POST'])
def publish_form(form_id):
    """Publish or unpublish a form"""
    data = get_json_body()
    if not isinstance(data.get('isPublished'), bool):
        raise ValidationError('Validation failed', errors=['isPublished must be a boolean'])

    form = get_form_or_404(form_id)
    form.is_published = data['isPublished']
    db.session.commit()

    logger.info('Form %s %s', form.id, 'published' if form.is_published else 'unpublished')
    return jsonify({
        'message': 'Form published successfully' if form.is_published else 'Form unpublished successfully',
        'form': form.to_dict(),
    })


@forms_bp.route('/<int:form_id>/responses', methods=['GET'])
def form_responses(form_id):
    """Responses for a form, newest first"""
    get_form_or_404(form_id)
    responses = Response.query.filter_by(form_id=form_id)\
        .order_by(Response.submitted_at.desc(), Response.id.desc()).all()
    return jsonify([r.to_dict() for r in responses])


@forms_bp.route('/<int:form_id>/analytics', methods=['GET'])
def form_analytics(form_id):
    get_form_or_404(form_id)
    return jsonify(compute_form_analytics(form_id).to_dict())
