"""
Question Definitions
Typed, immutable view of the questions stored on a form.
The three variants (categorize, cloze, comprehension) are separate
classes; Question is their union. Definitions are the only source of
truth for correct answers.
"""
from dataclasses import dataclass
from typing import Tuple, Union

from app.errors import ValidationError

CATEGORIZE = 'categorize'
CLOZE = 'cloze'
COMPREHENSION = 'comprehension'

QUESTION_TYPES = (CATEGORIZE, CLOZE, COMPREHENSION)
SUB_QUESTION_TYPES = ('multiple-choice', 'text', 'true-false')


@dataclass(frozen=True)
class Category:
    id: str
    name: str = ''
    color: str = ''

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'color': self.color}


@dataclass(frozen=True)
class CategorizeItem:
    id: str
    text: str = ''
    # Empty means the author never picked a correct category
    correct_category: str = ''

    def to_dict(self):
        return {'id': self.id, 'text': self.text, 'correctCategory': self.correct_category}


@dataclass(frozen=True)
class Blank:
    id: str
    position: int = 0
    correct_answer: str = ''
    placeholder: str = ''

    def to_dict(self):
        return {
            'id': self.id,
            'position': self.position,
            'correctAnswer': self.correct_answer,
            'placeholder': self.placeholder,
        }


@dataclass(frozen=True)
class SubQuestion:
    id: str
    question: str = ''
    type: str = 'text'
    options: Tuple[str, ...] = ()
    # Empty means ungraded
    correct_answer: str = ''

    @property
    def is_graded(self):
        return bool(self.correct_answer)

    def to_dict(self):
        return {
            'id': self.id,
            'question': self.question,
            'type': self.type,
            'options': list(self.options),
            'correctAnswer': self.correct_answer,
        }


@dataclass(frozen=True)
class CategorizeQuestion:
    id: str
    title: str
    categories: Tuple[Category, ...] = ()
    items: Tuple[CategorizeItem, ...] = ()
    description: str = ''
    image: str = ''
    required: bool = True

    type = CATEGORIZE

    def to_dict(self):
        data = _base_dict(self)
        data['categories'] = [c.to_dict() for c in self.categories]
        data['items'] = [i.to_dict() for i in self.items]
        return data


@dataclass(frozen=True)
class ClozeQuestion:
    id: str
    title: str
    sentence: str = ''
    blanks: Tuple[Blank, ...] = ()
    description: str = ''
    image: str = ''
    required: bool = True

    type = CLOZE

    def to_dict(self):
        data = _base_dict(self)
        data['sentence'] = self.sentence
        data['blanks'] = [b.to_dict() for b in self.blanks]
        return data


@dataclass(frozen=True)
class ComprehensionQuestion:
    id: str
    title: str
    passage: str = ''
    sub_questions: Tuple[SubQuestion, ...] = ()
    description: str = ''
    image: str = ''
    required: bool = True

    type = COMPREHENSION

    @property
    def graded_sub_questions(self):
        return tuple(sq for sq in self.sub_questions if sq.is_graded)

    def to_dict(self):
        data = _base_dict(self)
        data['passage'] = self.passage
        data['subQuestions'] = [sq.to_dict() for sq in self.sub_questions]
        return data


Question = Union[CategorizeQuestion, ClozeQuestion, ComprehensionQuestion]


def _base_dict(question):
    return {
        'id': question.id,
        'type': question.type,
        'title': question.title,
        'description': question.description,
        'image': question.image,
        'required': question.required,
    }


def _text(value, default=''):
    if value is None:
        return default
    return str(value)


def _objects(value):
    """Only the dict entries of a list; anything else is treated as empty"""
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def _common_fields(data):
    return {
        'id': _text(data.get('id')),
        'title': _text(data.get('title')),
        'description': _text(data.get('description')),
        'image': _text(data.get('image')),
        'required': bool(data.get('required', True)),
    }


def _parse_categorize(data):
    categories = tuple(
        Category(id=_text(c.get('id')), name=_text(c.get('name')), color=_text(c.get('color')))
        for c in _objects(data.get('categories'))
    )
    items = tuple(
        CategorizeItem(
            id=_text(i.get('id')),
            text=_text(i.get('text')),
            correct_category=_text(i.get('correctCategory')),
        )
        for i in _objects(data.get('items'))
    )
    return CategorizeQuestion(categories=categories, items=items, **_common_fields(data))


def _parse_cloze(data):
    blanks = []
    for index, b in enumerate(_objects(data.get('blanks'))):
        try:
            position = int(b.get('position', index))
        except (TypeError, ValueError):
            position = index
        blanks.append(Blank(
            id=_text(b.get('id')),
            position=position,
            correct_answer=_text(b.get('correctAnswer')),
            placeholder=_text(b.get('placeholder')),
        ))
    return ClozeQuestion(
        sentence=_text(data.get('sentence')),
        blanks=tuple(blanks),
        **_common_fields(data)
    )


def _parse_comprehension(data):
    sub_questions = []
    for sq in _objects(data.get('subQuestions')):
        sub_type = _text(sq.get('type'), 'text') or 'text'
        if sub_type not in SUB_QUESTION_TYPES:
            raise ValidationError(f"Unknown sub-question type: {sub_type}")
        options = sq.get('options') if isinstance(sq.get('options'), list) else []
        sub_questions.append(SubQuestion(
            id=_text(sq.get('id')),
            question=_text(sq.get('question')),
            type=sub_type,
            options=tuple(_text(o) for o in options),
            correct_answer=_text(sq.get('correctAnswer')),
        ))
    return ComprehensionQuestion(
        passage=_text(data.get('passage')),
        sub_questions=tuple(sub_questions),
        **_common_fields(data)
    )


_PARSERS = {
    CATEGORIZE: _parse_categorize,
    CLOZE: _parse_cloze,
    COMPREHENSION: _parse_comprehension,
}


def question_from_dict(data):
    """
    Build a typed question from its stored (camelCase) shape

    Raises:
        ValidationError: not an object, or an unknown question type
    """
    if not isinstance(data, dict):
        raise ValidationError('Question must be an object')

    parser = _PARSERS.get(data.get('type'))
    if parser is None:
        raise ValidationError(f"Unknown question type: {data.get('type')}")
    return parser(data)


def questions_from_list(items):
    """Parse a form's stored question list"""
    return [question_from_dict(item) for item in (items or [])]


def validate_questions(items):
    """
    Validate the question list sent by a form author

    Every question needs an id, a title and a known type, and ids must be
    unique within the form. All problems are reported together.

    Returns:
        list: parsed questions
    """
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValidationError('Validation failed', errors=['questions must be an array'])

    errors = []
    parsed = []
    seen_ids = set()

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            errors.append(f'questions[{index}] must be an object')
            continue

        qid = item.get('id')
        if qid is None or qid == '':
            errors.append(f'questions[{index}].id is required')
        elif not isinstance(qid, str):
            errors.append(f'questions[{index}].id must be a string')
        elif qid in seen_ids:
            errors.append(f'questions[{index}].id "{qid}" is duplicated')
        else:
            seen_ids.add(qid)

        if not _text(item.get('title')).strip():
            errors.append(f'questions[{index}].title is required')

        try:
            parsed.append(question_from_dict(item))
        except ValidationError as e:
            errors.append(f'questions[{index}]: {e.message}')

    if errors:
        raise ValidationError('Validation failed', errors=errors)
    return parsed
