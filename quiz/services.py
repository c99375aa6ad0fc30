import logging
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from articles.proxy import get_last_five_articles
from quiz.dtos import CreateQuizViewDto, QuizDto, QuizViewDto, SubmitResult, SubmitStatus
from quiz.mappers import dto_to_question, questions_to_dtos, quiz_to_dto
from quiz.models import Quiz, Question
from quiz.validators import validate_quiz_questions

logger = logging.getLogger("quiz_portal")


def current_articles():
    return get_last_five_articles()


def start_create() -> CreateQuizViewDto:
    return CreateQuizViewDto(articles=current_articles())


def _check_questions(view_dto: CreateQuizViewDto) -> Optional[SubmitResult]:
    try:
        validate_quiz_questions(view_dto.questions)
    except ValidationError as e:
        message = e.messages[0]
        logger.warning(f"Quiz rejected: {message}")
        return SubmitResult(status=SubmitStatus.INVALID,
                            view_dto=view_dto.model_copy(update={"error_message": message}))

    return None


def _create_questions(view_dto: CreateQuizViewDto, quiz_id: int):
    questions = [
        dto_to_question(question_dto, quiz_id=quiz_id, question_number=number)
        for number, question_dto in enumerate(view_dto.questions, start=1)
    ]
    Question.objects.bulk_create(questions)


def submit_create(view_dto: CreateQuizViewDto) -> SubmitResult:
    """
    Validate and save a new quiz with its four questions.

    A quiz already built from the same article is replaced. Nothing is written
    unless every check passes, and a database error leaves no rows behind.
    """
    view_dto = view_dto.model_copy(update={"error_message": None})

    failed = _check_questions(view_dto)
    if failed:
        return failed

    article = view_dto.selected_article()
    if article is None:
        logger.warning(f"Selected article {view_dto.selected_article_id} is not one of the candidates")
        return SubmitResult(status=SubmitStatus.ARTICLE_NOT_FOUND, view_dto=view_dto)

    try:
        with transaction.atomic():
            quiz = Quiz.objects.replace_for_article(article)
            _create_questions(view_dto, quiz_id=quiz.pk)
    except DatabaseError as e:
        logger.error(f"Error when saving quiz for article {article.article_id}: {e}")
        raise

    logger.info(f"Saved quiz {quiz.pk} for article {article.article_id}")

    return SubmitResult(status=SubmitStatus.SAVED, view_dto=view_dto, quiz_id=quiz.pk)


def start_edit(quiz_id: int) -> Optional[CreateQuizViewDto]:
    quiz = Quiz.objects.filter(pk=quiz_id).first()

    if quiz is None:
        logger.warning(f"Quiz {quiz_id} not found for edit")
        return None

    questions = Question.objects.for_quiz(quiz.pk)

    return CreateQuizViewDto(
        quiz_id=quiz.pk,
        selected_article_id=quiz.article_id,
        questions=questions_to_dtos(questions),
        articles=current_articles(),
        error_message=None,
    )


def submit_edit(view_dto: CreateQuizViewDto) -> SubmitResult:
    """
    Replace the questions of an existing quiz. The article stays as it was.
    """
    view_dto = view_dto.model_copy(update={"error_message": None})

    failed = _check_questions(view_dto)
    if failed:
        return failed

    try:
        with transaction.atomic():
            quiz = Quiz.objects.select_for_update().filter(pk=view_dto.quiz_id).first()

            if quiz is None:
                logger.warning(f"Quiz {view_dto.quiz_id} not found for edit")
                return SubmitResult(status=SubmitStatus.QUIZ_NOT_FOUND, view_dto=view_dto)

            quiz.save()
            Question.objects.filter(quiz=quiz).delete()
            _create_questions(view_dto, quiz_id=quiz.pk)
    except DatabaseError as e:
        logger.error(f"Error when updating quiz {view_dto.quiz_id}: {e}")
        raise

    logger.info(f"Updated quiz {quiz.pk}")

    return SubmitResult(status=SubmitStatus.SAVED,
                        view_dto=view_dto.model_copy(update={"selected_article_id": quiz.article_id}),
                        quiz_id=quiz.pk)


def list_all() -> list[QuizDto]:
    return [quiz_to_dto(quiz) for quiz in Quiz.objects.all()]


def delete_quiz(quiz_id: int) -> bool:
    quiz = Quiz.objects.filter(pk=quiz_id).first()

    if quiz is None:
        logger.warning(f"Quiz {quiz_id} not found for delete")
        return False

    quiz.delete()
    logger.info(f"Deleted quiz {quiz_id}")

    return True


def get_for_display(quiz_id: int) -> Optional[QuizViewDto]:
    quiz = Quiz.objects.filter(pk=quiz_id).first()

    if quiz is None:
        return None

    questions = Question.objects.for_quiz(quiz.pk)

    return QuizViewDto(quiz=quiz_to_dto(quiz), questions=questions_to_dtos(questions))
