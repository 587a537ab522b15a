import pytest

import quiz
from pipeline import run_pipeline


def test_generates_three_kinds_per_symbol():
    result = run_pipeline("hello world")
    questions = quiz.generate_questions(result.codes, result.tree, limit=100, seed=1)
    assert len(questions) == 24
    kinds = [q.kind for q in questions]
    assert kinds.count(quiz.SYMBOL_TO_CODE) == 8
    assert kinds.count(quiz.CODE_TO_SYMBOL) == 8
    assert kinds.count(quiz.TREE_PATH) == 8


def test_answers_match_codes():
    result = run_pipeline("hello world")
    for q in quiz.generate_questions(result.codes, result.tree, limit=100, seed=3):
        if q.kind == quiz.SYMBOL_TO_CODE or q.kind == quiz.TREE_PATH:
            assert q.answer == result.codes[q.symbol]
        else:
            assert result.codes[" " if q.answer == "SPACE" else q.answer] == q.code


def test_limit_and_seed():
    result = run_pipeline("hello world")
    a = quiz.generate_questions(result.codes, result.tree, seed=42)
    b = quiz.generate_questions(result.codes, result.tree, seed=42)
    assert len(a) == 10
    assert [q.prompt for q in a] == [q.prompt for q in b]


def test_single_symbol_has_no_path_question():
    result = run_pipeline("aaaa")
    questions = quiz.generate_questions(result.codes, result.tree, seed=0)
    assert sorted(q.kind for q in questions) == [quiz.CODE_TO_SYMBOL, quiz.SYMBOL_TO_CODE]


def test_empty_codes():
    assert quiz.generate_questions({}, None) == []


def test_check_answer():
    q = quiz.Question(quiz.CODE_TO_SYMBOL, "Which symbol does the code '000' represent?", "SPACE", code="000")
    assert quiz.check_answer(q, "  space ")
    assert not quiz.check_answer(q, "w")
    assert "SPACE" in quiz.Question(quiz.SYMBOL_TO_CODE, quiz.display_symbol(" "), "000").prompt


def test_score():
    result = run_pipeline("hello world")
    questions = quiz.generate_questions(result.codes, result.tree, limit=4, seed=5)
    answers = [questions[0].answer, " " + questions[1].answer.lower() + " ", "nope"]
    assert quiz.score(questions, answers) == (2, 3)
    assert quiz.score(questions, []) == (0, 0)
    assert quiz.score(questions, [q.answer for q in questions] + ["extra"]) == (4, 4)


def test_score_percent():
    assert quiz.score_percent(2, 3) == pytest.approx(66.666, rel=1e-3)
    assert quiz.score_percent(0, 0) == 0.0
