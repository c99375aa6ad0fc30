from quiz.dtos import QuestionDto, QuizDto
from quiz.models import Question


def quiz_to_dto(quiz) -> QuizDto:
    return QuizDto.model_validate(quiz)


def question_to_dto(question) -> QuestionDto:
    return QuestionDto.model_validate(question)


def questions_to_dtos(questions) -> list[QuestionDto]:
    return [question_to_dto(q) for q in questions]


def dto_to_question(dto: QuestionDto, quiz_id: int, question_number: int) -> Question:
    """Unsaved Question owned by quiz_id. Position comes from the submitted order, not the dto."""
    return Question(
        quiz_id=quiz_id,
        question_number=question_number,
        question_text=dto.question_text,
        answer_a=dto.answer_a,
        answer_b=dto.answer_b,
        answer_c=dto.answer_c,
        answer_d=dto.answer_d,
        correct_answer=dto.correct_answer,
    )
