"""
Form Model
A titled, ordered collection of questions plus publication settings
"""
from app.extensions import db
from app.models.questions import questions_from_list
from datetime import datetime, timezone


def now_utc():
    return datetime.now(timezone.utc)


DEFAULT_SETTINGS = {
    'allowMultipleSubmissions': False,
    'showProgressBar': True,
    'thankYouMessage': 'Thank you for your submission!',
    'redirectUrl': '',
}


class Form(db.Model):
    """Form model"""
    __tablename__ = 'form'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, default='')
    header_image = db.Column(db.Text, default='')

    # Questions in their stored (camelCase) shape, see app.models.questions
    questions = db.Column(db.JSON, nullable=False, default=list)
    settings = db.Column(db.JSON, nullable=False, default=dict)

    is_published = db.Column(db.Boolean, default=False, nullable=False)
    created_by = db.Column(db.String(100), default='anonymous')
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)

    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    # Relationships
    responses = db.relationship(
        'Response', backref='form', lazy=True, cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f'<Form {self.slug}>'

    def get_settings(self):
        """Stored settings merged over the defaults"""
        merged = dict(DEFAULT_SETTINGS)
        merged.update(self.settings or {})
        return merged

    def get_question_definitions(self):
        """Typed question definitions used for grading"""
        return questions_from_list(self.questions)

    @property
    def thank_you_message(self):
        return self.get_settings().get('thankYouMessage') or DEFAULT_SETTINGS['thankYouMessage']

    @property
    def allows_multiple_submissions(self):
        return bool(self.get_settings().get('allowMultipleSubmissions'))

    def to_dict(self, summary=False):
        data = {
            'id': self.id,
            'title': self.title,
            'description': self.description or '',
            'headerImage': self.header_image or '',
            'isPublished': bool(self.is_published),
            'slug': self.slug,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
        if summary:
            return data

        data.update({
            'questions': list(self.questions or []),
            'settings': self.get_settings(),
            'createdBy': self.created_by,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        })
        return data
