"""
Scoring Service
All-or-nothing grading for categorize, cloze and comprehension questions.
Pure functions over already-loaded data: no database, no I/O.
"""
from dataclasses import dataclass

from app.models.answers import (
    CategorizeAnswer,
    ClozeAnswer,
    ComprehensionAnswer,
    answers_from_list,
)
from app.models.questions import (
    CategorizeQuestion,
    ClozeQuestion,
    ComprehensionQuestion,
    questions_from_list,
)


@dataclass(frozen=True)
class ScoreResult:
    score: int = 0
    max_score: int = 0

    def to_dict(self):
        return {'score': self.score, 'maxScore': self.max_score}


def _same_text(expected, given):
    """Case-insensitive equality; whitespace is significant"""
    return given is not None and expected.lower() == given.lower()


class ScoringService:
    """Service for scoring submitted answer sets"""

    @staticmethod
    def grade_categorize(answer, question):
        """Every defined item must be placed in its correct category"""
        correct_count = 0
        for item in question.items:
            if answer.category_for(item.id) == item.correct_category:
                correct_count += 1
        return correct_count == len(question.items)

    @staticmethod
    def grade_cloze(answer, question):
        """Every blank must match its correct answer, ignoring case"""
        correct_count = 0
        for blank in question.blanks:
            if _same_text(blank.correct_answer, answer.text_for(blank.id)):
                correct_count += 1
        return correct_count == len(question.blanks)

    @staticmethod
    def grade_comprehension(answer, question):
        """Every sub-question with a correct answer must match; ungraded ones are ignored"""
        graded = question.graded_sub_questions
        correct_count = 0
        for sub_question in graded:
            if _same_text(sub_question.correct_answer, answer.text_for(sub_question.id)):
                correct_count += 1
        return correct_count == len(graded)

    @staticmethod
    def grade_answer(answer, question):
        """
        Decide whether one answer earns its question's point

        The question definition picks the rule; an answer shaped for a
        different variant (or a MalformedAnswer) never earns it.
        """
        if isinstance(question, CategorizeQuestion):
            return isinstance(answer, CategorizeAnswer) and ScoringService.grade_categorize(answer, question)
        if isinstance(question, ClozeQuestion):
            return isinstance(answer, ClozeAnswer) and ScoringService.grade_cloze(answer, question)
        if isinstance(question, ComprehensionQuestion):
            return isinstance(answer, ComprehensionAnswer) and ScoringService.grade_comprehension(answer, question)
        raise TypeError(f'Unsupported question definition: {type(question).__name__}')

    @staticmethod
    def calculate_score(answers, questions):
        """
        Score an answer set against the form's question definitions

        Each answer whose questionId matches a definition is worth one
        point. Answers for unknown questions are skipped entirely.
        Duplicate answers for the same question are each scored.

        Args:
            answers: typed answers (app.models.answers)
            questions: typed question definitions (app.models.questions)

        Returns:
            ScoreResult
        """
        by_id = {}
        for question in questions:
            by_id.setdefault(question.id, question)

        score = 0
        max_score = 0
        for answer in answers:
            question = by_id.get(answer.question_id)
            if question is None:
                continue

            max_score += 1
            if ScoringService.grade_answer(answer, question):
                score += 1

        return ScoreResult(score=score, max_score=max_score)

    @staticmethod
    def score_payload(raw_answers, raw_questions):
        """Score answers and questions given in their stored dict shape"""
        return ScoringService.calculate_score(
            answers_from_list(raw_answers),
            questions_from_list(raw_questions),
        )
