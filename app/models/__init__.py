"""
Models Package
Exports database models and the typed question/answer definitions
"""
from app.models.form import Form
from app.models.response import Response
from app.models.questions import (
    Question,
    CategorizeQuestion,
    ClozeQuestion,
    ComprehensionQuestion,
    question_from_dict,
    questions_from_list,
    validate_questions,
)
from app.models.answers import (
    Answer,
    CategorizeAnswer,
    ClozeAnswer,
    ComprehensionAnswer,
    MalformedAnswer,
    answer_from_dict,
    answers_from_list,
)

__all__ = [
    'Form', 'Response',
    'Question', 'CategorizeQuestion', 'ClozeQuestion', 'ComprehensionQuestion',
    'question_from_dict', 'questions_from_list', 'validate_questions',
    'Answer', 'CategorizeAnswer', 'ClozeAnswer', 'ComprehensionAnswer', 'MalformedAnswer',
    'answer_from_dict', 'answers_from_list',
]
