"""
Response Model
One submitted answer set with the score computed at submission time
"""
from app.extensions import db
from datetime import datetime, timezone


def now_utc():
    return datetime.now(timezone.utc)


class Response(db.Model):
    """Response model"""
    __tablename__ = 'response'

    id = db.Column(db.Integer, primary_key=True)
    form_id = db.Column(db.Integer, db.ForeignKey('form.id'), nullable=False, index=True)
    form_slug = db.Column(db.String(255), nullable=False, index=True)

    # Answers exactly as submitted, see app.models.answers
    answers = db.Column(db.JSON, nullable=False, default=list)

    score = db.Column(db.Integer, nullable=False, default=0)
    max_score = db.Column(db.Integer, nullable=False, default=0)
    completion_time = db.Column(db.Float, nullable=False, default=0)  # seconds, caller supplied
    is_complete = db.Column(db.Boolean, nullable=False, default=True)
    submitted_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)

    # Submitter info (opaque)
    user_agent = db.Column(db.String(512), default='')
    ip_address = db.Column(db.String(64), default='')
    session_id = db.Column(db.String(128), default='', index=True)

    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    __table_args__ = (
        db.Index('ix_response_form_submitted', 'form_id', 'submitted_at'),
    )

    def __repr__(self):
        return f'<Response {self.id} for {self.form_slug}: {self.score}/{self.max_score}>'

    def to_dict(self, include_form_title=False):
        data = {
            'id': self.id,
            'formId': self.form_id,
            'formSlug': self.form_slug,
            'answers': list(self.answers or []),
            'submittedAt': self.submitted_at.isoformat() if self.submitted_at else None,
            'submitterInfo': {
                'userAgent': self.user_agent or '',
                'ipAddress': self.ip_address or '',
                'sessionId': self.session_id or '',
            },
            'score': self.score,
            'maxScore': self.max_score,
            'completionTime': self.completion_time,
            'isComplete': bool(self.is_complete),
        }
        if include_form_title and self.form is not None:
            data['formTitle'] = self.form.title
        return data
