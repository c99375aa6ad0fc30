from itertools import combinations

from django.core.exceptions import ValidationError

from quiz.models import QUESTIONS_PER_QUIZ

QUESTIONS_NOT_UNIQUE = "Questions should be unique"
ANSWERS_NOT_UNIQUE = "A question cannot have the same answer more than once"


def validate_unique_questions(questions):
    if len({q.question_text for q in questions}) != QUESTIONS_PER_QUIZ:
        raise ValidationError(QUESTIONS_NOT_UNIQUE, code="duplicate_question")


def validate_unique_answers(questions):
    # Stops at the first question with a repeated answer
    for question in questions:
        if any(first == second for first, second in combinations(question.answers, 2)):
            raise ValidationError(ANSWERS_NOT_UNIQUE, code="duplicate_answer")


def validate_quiz_questions(questions):
    validate_unique_questions(questions)
    validate_unique_answers(questions)
