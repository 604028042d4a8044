import json

import pytest

from app.models.answers import answers_from_list
from app.models.questions import questions_from_list
from app.services import ScoringService, ScoreResult


def score(raw_answers, raw_questions):
    return ScoringService.score_payload(raw_answers, raw_questions)


def cloze_answer(text, question_id='q-cloze'):
    return {'questionId': question_id, 'questionType': 'cloze',
            'blankAnswers': [{'blankId': 'b1', 'answer': text}]}


def test_perfect_answers_score_every_question(all_questions, perfect_answers):
    assert score(perfect_answers, all_questions) == ScoreResult(score=3, max_score=3)


def test_answers_for_unknown_questions_are_ignored(all_questions):
    answers = [
        {'questionId': 'nope', 'questionType': 'cloze', 'blankAnswers': []},
        {'questionId': 'other', 'questionType': 'categorize', 'categorizedItems': []},
    ]
    assert score(answers, all_questions) == ScoreResult(score=0, max_score=0)


def test_empty_answer_set_scores_nothing(all_questions):
    assert score([], all_questions) == ScoreResult(0, 0)


def test_max_score_counts_matched_answers_regardless_of_correctness(all_questions):
    answers = [
        cloze_answer('London'),
        {'questionId': 'q-cat', 'questionType': 'categorize', 'categorizedItems': []},
        {'questionId': 'ghost', 'questionType': 'cloze', 'blankAnswers': []},
    ]
    assert score(answers, all_questions) == ScoreResult(score=0, max_score=2)


@pytest.mark.parametrize('text, earned', [
    ('Paris', 1),
    ('paris', 1),
    ('PARIS', 1),
    ('Paris ', 0),
    (' Paris', 0),
    ('Pariss', 0),
])
def test_cloze_is_case_insensitive_without_trimming(cloze_question, text, earned):
    assert score([cloze_answer(text)], [cloze_question]) == ScoreResult(earned, 1)


def test_cloze_needs_every_blank(cloze_question):
    cloze_question['blanks'].append(
        {'id': 'b2', 'position': 1, 'correctAnswer': 'Seine', 'placeholder': 'river'}
    )
    one_of_two = cloze_answer('Paris')
    both = {'questionId': 'q-cloze', 'questionType': 'cloze', 'blankAnswers': [
        {'blankId': 'b1', 'answer': 'paris'},
        {'blankId': 'b2', 'answer': 'seine'},
    ]}

    assert score([one_of_two], [cloze_question]).score == 0
    assert score([both], [cloze_question]).score == 1


def test_categorize_is_all_or_nothing(categorize_question):
    half_right = {'questionId': 'q-cat', 'questionType': 'categorize', 'categorizedItems': [
        {'itemId': 'dog', 'categoryId': 'mammal'},
        {'itemId': 'owl', 'categoryId': 'mammal'},
    ]}
    assert score([half_right], [categorize_question]) == ScoreResult(0, 1)


def test_categorize_unplaced_items_count_as_wrong(categorize_question):
    partial = {'questionId': 'q-cat', 'questionType': 'categorize', 'categorizedItems': [
        {'itemId': 'dog', 'categoryId': 'mammal'},
    ]}
    assert score([partial], [categorize_question]) == ScoreResult(0, 1)


def test_categorize_extra_placements_do_not_inflate(categorize_question):
    padded = {'questionId': 'q-cat', 'questionType': 'categorize', 'categorizedItems': [
        {'itemId': 'dog', 'categoryId': 'mammal'},
        {'itemId': 'dog', 'categoryId': 'mammal'},
        {'itemId': 'made-up', 'categoryId': 'bird'},
    ]}
    assert score([padded], [categorize_question]) == ScoreResult(0, 1)


def test_categorize_item_without_correct_category_cannot_be_placed_correctly(categorize_question):
    categorize_question['items'][1]['correctCategory'] = ''
    answer = {'questionId': 'q-cat', 'questionType': 'categorize', 'categorizedItems': [
        {'itemId': 'dog', 'categoryId': 'mammal'},
        {'itemId': 'owl', 'categoryId': 'bird'},
    ]}
    assert score([answer], [categorize_question]).score == 0


def test_comprehension_ignores_ungraded_sub_questions(comprehension_question):
    answer = {'questionId': 'q-comp', 'questionType': 'comprehension', 'subAnswers': [
        {'subQuestionId': 's1', 'answer': 'east'},
        {'subQuestionId': 's2', 'answer': 'TRUE'},
    ]}
    assert score([answer], [comprehension_question]) == ScoreResult(1, 1)


def test_comprehension_needs_every_graded_sub_question(comprehension_question):
    answer = {'questionId': 'q-comp', 'questionType': 'comprehension', 'subAnswers': [
        {'subQuestionId': 's1', 'answer': 'east'},
        {'subQuestionId': 's2', 'answer': 'false'},
        {'subQuestionId': 's3', 'answer': 'happy'},
    ]}
    assert score([answer], [comprehension_question]) == ScoreResult(0, 1)


@pytest.mark.parametrize('question, answer', [
    ({'id': 'q', 'type': 'categorize', 'title': 'T', 'items': []},
     {'questionId': 'q', 'questionType': 'categorize', 'categorizedItems': []}),
    ({'id': 'q', 'type': 'cloze', 'title': 'T', 'blanks': []},
     {'questionId': 'q', 'questionType': 'cloze', 'blankAnswers': [{'blankId': 'x', 'answer': 'y'}]}),
    ({'id': 'q', 'type': 'comprehension', 'title': 'T',
      'subQuestions': [{'id': 's', 'question': 'Thoughts?', 'correctAnswer': ''}]},
     {'questionId': 'q', 'questionType': 'comprehension', 'subAnswers': []}),
])
def test_question_without_gradable_parts_always_awards_its_point(question, answer):
    assert score([answer], [question]) == ScoreResult(1, 1)


def test_malformed_answer_reserves_the_point_but_scores_zero(cloze_question):
    answers = [
        {'questionId': 'q-cloze', 'questionType': 'cloze'},
        {'questionId': 'q-cloze', 'questionType': 'essay', 'text': 'Paris'},
    ]
    assert score(answers, [cloze_question]) == ScoreResult(0, 2)


def test_answer_shaped_for_another_variant_scores_zero(categorize_question):
    wrong_shape = {'questionId': 'q-cat', 'questionType': 'cloze', 'blankAnswers': []}
    assert score([wrong_shape], [categorize_question]) == ScoreResult(0, 1)


def test_duplicate_answers_are_each_scored(cloze_question):
    answers = [cloze_answer('Paris'), cloze_answer('Rome')]
    assert score(answers, [cloze_question]) == ScoreResult(score=1, max_score=2)


def test_answer_order_does_not_matter(all_questions, perfect_answers):
    forward = score(perfect_answers, all_questions)
    backward = score(list(reversed(perfect_answers)), list(reversed(all_questions)))
    assert forward == backward


def test_scores_are_stable_through_the_stored_shape(all_questions, perfect_answers):
    perfect_answers[1]['blankAnswers'][0]['answer'] = 'Lyon'
    direct = ScoringService.calculate_score(
        answers_from_list(perfect_answers), questions_from_list(all_questions)
    )

    stored_answers = json.loads(json.dumps([a.to_dict() for a in answers_from_list(perfect_answers)]))
    stored_questions = json.loads(json.dumps([q.to_dict() for q in questions_from_list(all_questions)]))

    assert score(stored_answers, stored_questions) == direct == ScoreResult(2, 3)


def test_grade_answer_rejects_unknown_definitions():
    with pytest.raises(TypeError):
        ScoringService.grade_answer(answers_from_list([cloze_answer('x')])[0], object())


def test_score_result_serializes_with_stored_names():
    assert ScoreResult(2, 3).to_dict() == {'score': 2, 'maxScore': 3}
