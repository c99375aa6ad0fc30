from django import forms

from articles.schemas import ARTICLE_ID_MAX_LENGTH
from quiz.models import ANSWER_CHOICES, QUESTIONS_PER_QUIZ


class ArticleSelectionForm(forms.Form):
    # Checked against the candidate list by the service, not here
    selected_article_id = forms.CharField(label="Article", max_length=ARTICLE_ID_MAX_LENGTH)


class QuestionForm(forms.Form):
    question_text = forms.CharField(label="Question", max_length=1024)
    answer_a = forms.CharField(label="Answer A", max_length=255)
    answer_b = forms.CharField(label="Answer B", max_length=255)
    answer_c = forms.CharField(label="Answer C", max_length=255)
    answer_d = forms.CharField(label="Answer D", max_length=255)
    correct_answer = forms.ChoiceField(label="Correct answer", choices=ANSWER_CHOICES)


QuestionFormSet = forms.formset_factory(
    QuestionForm,
    extra=0,
    min_num=QUESTIONS_PER_QUIZ,
    max_num=QUESTIONS_PER_QUIZ,
    validate_min=True,
    validate_max=True,
)

QUESTION_FORMSET_PREFIX = "questions"
