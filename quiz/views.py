import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods, require_GET
from django.views.generic.list import ListView

from articles.proxy import ArticleProviderError
from quiz import services
from quiz.dtos import CreateQuizViewDto, QuestionDto, SubmitStatus
from quiz.forms import ArticleSelectionForm, QuestionForm, QuestionFormSet, QUESTION_FORMSET_PREFIX
from quiz.models import Quiz

logger = logging.getLogger("quiz_portal")

CREATE_TEMPLATE = "quiz/create_quiz.html"
EDIT_TEMPLATE = "quiz/edit_quiz.html"

ARTICLES_UNAVAILABLE = "Unable to load articles right now, please try again later."


class QuizListView(LoginRequiredMixin, ListView):
    model = Quiz
    template_name = 'quiz/index.html'
    context_object_name = 'quizzes'

    def get_queryset(self):
        return services.list_all()


@login_required(login_url='login')
@require_GET
def get_all_quizzes(request):
    quiz_list = services.list_all()
    return JsonResponse({"data": [quiz.model_dump(mode="json") for quiz in quiz_list]})


@login_required(login_url='login')
@require_GET
def get_quiz_data(request, pk):

    quiz_view_dto = services.get_for_display(pk)

    if quiz_view_dto is None:
        return redirect("index")

    return render(request, 'quiz/quiz_detail.html', {'quiz': quiz_view_dto.quiz,
                                                     'questions': quiz_view_dto.questions})


def _question_dtos(formset):
    return [QuestionDto(**form.cleaned_data) for form in formset]


def _question_initial(view_dto):
    return [question.model_dump(include=set(QuestionForm.base_fields)) for question in view_dto.questions]


def _quiz_form_context(view_dto, formset, form=None):
    return {"view_dto": view_dto, "formset": formset, "form": form}


@login_required(login_url='login')
@require_http_methods(["GET", "POST"])
def create_quiz(request):

    if request.method == 'GET':
        try:
            view_dto = services.start_create()
        except ArticleProviderError as e:
            logger.error(e)
            messages.error(request, ARTICLES_UNAVAILABLE)
            return redirect("index")

        formset = QuestionFormSet(prefix=QUESTION_FORMSET_PREFIX)
        return render(request, CREATE_TEMPLATE, _quiz_form_context(view_dto, formset, ArticleSelectionForm()))

    form = ArticleSelectionForm(request.POST)
    formset = QuestionFormSet(request.POST, prefix=QUESTION_FORMSET_PREFIX)

    view_dto = CreateQuizViewDto(selected_article_id=request.POST.get('selected_article_id'))

    try:
        articles = services.current_articles()
    except ArticleProviderError as e:
        # Keep what was typed so it can be resubmitted once the articles are back
        logger.error(e)
        messages.error(request, ARTICLES_UNAVAILABLE)
        return render(request, CREATE_TEMPLATE, _quiz_form_context(view_dto, formset, form))

    view_dto = view_dto.model_copy(update={"articles": articles})

    form_valid = form.is_valid()
    formset_valid = formset.is_valid()

    if not (form_valid and formset_valid):
        logger.debug(form.errors)
        logger.debug(formset.errors)
        return render(request, CREATE_TEMPLATE, _quiz_form_context(view_dto, formset, form))

    view_dto = view_dto.model_copy(update={
        "selected_article_id": form.cleaned_data['selected_article_id'],
        "questions": _question_dtos(formset),
    })

    result = services.submit_create(view_dto)

    if result.saved:
        messages.success(request, "Quiz saved successfully!")
        return redirect("index")

    if result.status == SubmitStatus.ARTICLE_NOT_FOUND:
        return render(request, EDIT_TEMPLATE, _quiz_form_context(result.view_dto, formset, form))

    return render(request, CREATE_TEMPLATE, _quiz_form_context(result.view_dto, formset, form))


@login_required(login_url='login')
@require_http_methods(["GET", "POST"])
def edit_quiz(request, pk):

    if request.method == 'GET':
        try:
            view_dto = services.start_edit(pk)
        except ArticleProviderError as e:
            logger.error(e)
            messages.error(request, ARTICLES_UNAVAILABLE)
            return redirect("index")

        if view_dto is None:
            return redirect("index")

        formset = QuestionFormSet(initial=_question_initial(view_dto), prefix=QUESTION_FORMSET_PREFIX)
        return render(request, EDIT_TEMPLATE, _quiz_form_context(view_dto, formset))

    formset = QuestionFormSet(request.POST, prefix=QUESTION_FORMSET_PREFIX)

    # Article cannot change on edit, the posted id is only echoed back
    view_dto = CreateQuizViewDto(quiz_id=pk, selected_article_id=request.POST.get('selected_article_id'))

    if not formset.is_valid():
        logger.debug(formset.errors)
        return render(request, EDIT_TEMPLATE, _quiz_form_context(view_dto, formset))

    result = services.submit_edit(view_dto.model_copy(update={"questions": _question_dtos(formset)}))

    if result.saved:
        messages.success(request, "Quiz updated successfully!")
        return redirect("index")

    if result.status == SubmitStatus.QUIZ_NOT_FOUND:
        return redirect("index")

    return render(request, EDIT_TEMPLATE, _quiz_form_context(result.view_dto, formset))


@login_required(login_url='login')
@require_http_methods(["DELETE", "POST"])
def delete_quiz(request, pk):

    if not services.delete_quiz(pk):
        return JsonResponse({"success": False, "message": "Error while deleting"})

    return JsonResponse({"success": True, "message": "Delete successful"})
