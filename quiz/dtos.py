from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from articles.schemas import ArticleDto


class QuestionDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    question_text: str
    answer_a: str
    answer_b: str
    answer_c: str
    answer_d: str
    correct_answer: str = 'A'
    question_number: int = 0

    @property
    def answers(self):
        return [self.answer_a, self.answer_b, self.answer_c, self.answer_d]


class QuizDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    article_id: str
    title: str
    summary: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateQuizViewDto(BaseModel):
    """Everything the create/edit screen needs, in or out."""

    quiz_id: Optional[int] = None
    articles: List[ArticleDto] = []
    selected_article_id: Optional[str] = None
    questions: List[QuestionDto] = []
    error_message: Optional[str] = None

    def selected_article(self):
        return next((a for a in self.articles if a.article_id == self.selected_article_id), None)


class QuizViewDto(BaseModel):
    quiz: QuizDto
    questions: List[QuestionDto]


class SubmitStatus(str, Enum):
    SAVED = 'saved'
    INVALID = 'invalid'
    ARTICLE_NOT_FOUND = 'article_not_found'
    QUIZ_NOT_FOUND = 'quiz_not_found'


class SubmitResult(BaseModel):
    status: SubmitStatus
    view_dto: CreateQuizViewDto
    quiz_id: Optional[int] = None

    @property
    def saved(self):
        return self.status == SubmitStatus.SAVED


__all__ = [
    'ArticleDto', 'QuestionDto', 'QuizDto', 'CreateQuizViewDto', 'QuizViewDto', 'SubmitStatus', 'SubmitResult',
]
