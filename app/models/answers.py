"""
Answer Records
One answer per question, shaped like the question's variant.
Answers come from respondents and are untrusted: parsing never raises,
anything unusable becomes a MalformedAnswer that scores zero.
"""
from dataclasses import dataclass
from typing import Tuple, Union

from app.models.questions import CATEGORIZE, CLOZE, COMPREHENSION


@dataclass(frozen=True)
class CategorizedItem:
    item_id: str
    category_id: str

    def to_dict(self):
        return {'itemId': self.item_id, 'categoryId': self.category_id}


@dataclass(frozen=True)
class BlankAnswer:
    blank_id: str
    answer: str

    def to_dict(self):
        return {'blankId': self.blank_id, 'answer': self.answer}


@dataclass(frozen=True)
class SubAnswer:
    sub_question_id: str
    answer: str

    def to_dict(self):
        return {'subQuestionId': self.sub_question_id, 'answer': self.answer}


@dataclass(frozen=True)
class CategorizeAnswer:
    question_id: str
    categorized_items: Tuple[CategorizedItem, ...] = ()

    question_type = CATEGORIZE

    def category_for(self, item_id):
        """Category the respondent chose for an item, or None"""
        for placed in self.categorized_items:
            if placed.item_id == item_id:
                return placed.category_id
        return None

    def to_dict(self):
        return {
            'questionId': self.question_id,
            'questionType': self.question_type,
            'categorizedItems': [c.to_dict() for c in self.categorized_items],
        }


@dataclass(frozen=True)
class ClozeAnswer:
    question_id: str
    blank_answers: Tuple[BlankAnswer, ...] = ()

    question_type = CLOZE

    def text_for(self, blank_id):
        for blank in self.blank_answers:
            if blank.blank_id == blank_id:
                return blank.answer
        return None

    def to_dict(self):
        return {
            'questionId': self.question_id,
            'questionType': self.question_type,
            'blankAnswers': [b.to_dict() for b in self.blank_answers],
        }


@dataclass(frozen=True)
class ComprehensionAnswer:
    question_id: str
    sub_answers: Tuple[SubAnswer, ...] = ()

    question_type = COMPREHENSION

    def text_for(self, sub_question_id):
        for sub in self.sub_answers:
            if sub.sub_question_id == sub_question_id:
                return sub.answer
        return None

    def to_dict(self):
        return {
            'questionId': self.question_id,
            'questionType': self.question_type,
            'subAnswers': [s.to_dict() for s in self.sub_answers],
        }


@dataclass(frozen=True)
class MalformedAnswer:
    """Unknown variant or missing/ill-formed payload; never earns a point"""
    question_id: str
    question_type: str = ''

    def to_dict(self):
        return {'questionId': self.question_id, 'questionType': self.question_type}


Answer = Union[CategorizeAnswer, ClozeAnswer, ComprehensionAnswer, MalformedAnswer]


def _pairs(entries, key_field, value_field):
    """(key, value) string pairs; entries that are not well-formed are skipped"""
    pairs = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        key = entry.get(key_field)
        value = entry.get(value_field)
        if not isinstance(key, str) or not isinstance(value, str):
            continue
        pairs.append((key, value))
    return pairs


def answer_from_dict(data):
    """
    Build a typed answer from a submitted payload

    Returns None when the entry carries no usable questionId at all.
    """
    if not isinstance(data, dict):
        return None

    # Ids are compared exactly, so only strings can ever match a question
    question_id = data.get('questionId')
    if not isinstance(question_id, str):
        return None
    question_type = data.get('questionType')

    if question_type == CATEGORIZE:
        entries = data.get('categorizedItems')
        if isinstance(entries, list):
            return CategorizeAnswer(
                question_id=question_id,
                categorized_items=tuple(
                    CategorizedItem(item_id=k, category_id=v)
                    for k, v in _pairs(entries, 'itemId', 'categoryId')
                ),
            )

    elif question_type == CLOZE:
        entries = data.get('blankAnswers')
        if isinstance(entries, list):
            return ClozeAnswer(
                question_id=question_id,
                blank_answers=tuple(
                    BlankAnswer(blank_id=k, answer=v)
                    for k, v in _pairs(entries, 'blankId', 'answer')
                ),
            )

    elif question_type == COMPREHENSION:
        entries = data.get('subAnswers')
        if isinstance(entries, list):
            return ComprehensionAnswer(
                question_id=question_id,
                sub_answers=tuple(
                    SubAnswer(sub_question_id=k, answer=v)
                    for k, v in _pairs(entries, 'subQuestionId', 'answer')
                ),
            )

    return MalformedAnswer(
        question_id=question_id,
        question_type=question_type if isinstance(question_type, str) else '',
    )


def answers_from_list(items):
    """Parse a submitted answer list, dropping entries without a questionId"""
    if not isinstance(items, list):
        return []
    answers = []
    for item in items:
        answer = answer_from_dict(item)
        if answer is not None:
            answers.append(answer)
    return answers
