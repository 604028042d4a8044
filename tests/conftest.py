import pytest

from app import create_app
from app.extensions import db


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def categorize_question():
    return {
        'id': 'q-cat',
        'type': 'categorize',
        'title': 'Sort the animals',
        'categories': [
            {'id': 'mammal', 'name': 'Mammal', 'color': '#3b82f6'},
            {'id': 'bird', 'name': 'Bird', 'color': '#10b981'},
        ],
        'items': [
            {'id': 'dog', 'text': 'Dog', 'correctCategory': 'mammal'},
            {'id': 'owl', 'text': 'Owl', 'correctCategory': 'bird'},
        ],
    }


@pytest.fixture
def cloze_question():
    return {
        'id': 'q-cloze',
        'type': 'cloze',
        'title': 'Fill in the capital',
        'sentence': 'The capital of France is _____.',
        'blanks': [
            {'id': 'b1', 'position': 0, 'correctAnswer': 'Paris', 'placeholder': 'city'},
        ],
    }


@pytest.fixture
def comprehension_question():
    return {
        'id': 'q-comp',
        'type': 'comprehension',
        'title': 'Read and answer',
        'passage': 'The sun rises in the east.',
        'subQuestions': [
            {'id': 's1', 'question': 'Where does the sun rise?', 'type': 'text',
             'options': [], 'correctAnswer': 'East'},
            {'id': 's2', 'question': 'Is the sun a star?', 'type': 'true-false',
             'options': [], 'correctAnswer': 'true'},
            {'id': 's3', 'question': 'How did the passage make you feel?', 'type': 'text',
             'options': [], 'correctAnswer': ''},
        ],
    }


@pytest.fixture
def all_questions(categorize_question, cloze_question, comprehension_question):
    return [categorize_question, cloze_question, comprehension_question]


@pytest.fixture
def perfect_answers():
    return [
        {'questionId': 'q-cat', 'questionType': 'categorize', 'categorizedItems': [
            {'itemId': 'dog', 'categoryId': 'mammal'},
            {'itemId': 'owl', 'categoryId': 'bird'},
        ]},
        {'questionId': 'q-cloze', 'questionType': 'cloze', 'blankAnswers': [
            {'blankId': 'b1', 'answer': 'paris'},
        ]},
        {'questionId': 'q-comp', 'questionType': 'comprehension', 'subAnswers': [
            {'subQuestionId': 's1', 'answer': 'EAST'},
            {'subQuestionId': 's2', 'answer': 'True'},
        ]},
    ]


@pytest.fixture
def make_form(client, all_questions):
    """Create a form through the API, published unless told otherwise"""
    def _make_form(questions=None, publish=True, title='Geography quiz', settings=None):
        body = {'title': title, 'questions': all_questions if questions is None else questions}
        if settings is not None:
            body['settings'] = settings
        res = client.post('/api/forms', json=body)
        assert res.status_code == 201, res.get_json()
        form = res.get_json()
        if publish:
            res = client.post(f"/api/forms/{form['id']}/publish", json={'isPublished': True})
            assert res.status_code == 200
            form = res.get_json()['form']
        return form
    return _make_form
