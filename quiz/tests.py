import json
from itertools import combinations
from unittest.mock import patch

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.db import DatabaseError, connection
from django.test import SimpleTestCase, TestCase, TransactionTestCase, Client
from django.urls import reverse

from articles.proxy import ArticleProviderError
from articles.schemas import ArticleDto
from quiz import services
from quiz.dtos import CreateQuizViewDto, QuestionDto, SubmitStatus
from quiz.mappers import dto_to_question, question_to_dto, quiz_to_dto
from quiz.models import Quiz, Question, QuestionQuerySet
from quiz.validators import (ANSWERS_NOT_UNIQUE, QUESTIONS_NOT_UNIQUE, validate_unique_answers,
                             validate_unique_questions)


ARTICLES = [
    ArticleDto(article_id="A1", title="First article", summary="Summary of the first article"),
    ArticleDto(article_id="A2", title="Second article", summary="Summary of the second article"),
]

ANSWER_FIELDS = ["answer_a", "answer_b", "answer_c", "answer_d"]


def question_dict(text, answers=("a", "b", "c", "d"), correct="A"):
    data = {"question_text": text, "correct_answer": correct}
    data.update(dict(zip(ANSWER_FIELDS, answers)))
    return data


def question_dicts(texts=("Q1", "Q2", "Q3", "Q4")):
    return [question_dict(text) for text in texts]


def question_dtos(texts=("Q1", "Q2", "Q3", "Q4")):
    return [QuestionDto(**q) for q in question_dicts(texts)]


def quiz_post_data(questions, selected_article_id="A1"):
    data = {
        "questions-TOTAL_FORMS": str(len(questions)),
        "questions-INITIAL_FORMS": "0",
        "questions-MIN_NUM_FORMS": "4",
        "questions-MAX_NUM_FORMS": "4",
    }
    if selected_article_id is not None:
        data["selected_article_id"] = selected_article_id

    for index, question in enumerate(questions):
        for field, value in question.items():
            data[f"questions-{index}-{field}"] = value

    return data


def make_quiz(article_id="OLD", title="Stored quiz", number_of_questions=4):
    quiz = Quiz.objects.create(article_id=article_id, title=title, summary="stored")
    for i in range(1, number_of_questions + 1):
        Question.objects.create(quiz=quiz, question_number=i, question_text=f"old_question_{i}",
                                answer_a="w", answer_b="x", answer_c="y", answer_d="z", correct_answer="B")
    return quiz


class ValidatorsTestCase(SimpleTestCase):

    def test_unique_questions_pass(self):
        validate_unique_questions(question_dtos())
        validate_unique_answers(question_dtos())

    def test_duplicate_question_text_rejected(self):
        with self.assertRaises(ValidationError) as cm:
            validate_unique_questions(question_dtos(("Q1", "Q2", "Q1", "Q4")))

        self.assertEqual(cm.exception.messages, [QUESTIONS_NOT_UNIQUE])

    def test_fewer_than_four_questions_rejected(self):
        with self.assertRaises(ValidationError):
            validate_unique_questions(question_dtos(("Q1", "Q2", "Q3")))

    def test_question_text_comparison_is_case_sensitive(self):
        validate_unique_questions(question_dtos(("Q1", "q1", "Q3", "Q4")))

    def test_duplicate_answer_in_every_slot_rejected(self):
        for first, second in combinations(range(4), 2):
            with self.subTest(first=ANSWER_FIELDS[first], second=ANSWER_FIELDS[second]):
                answers = ["a", "b", "c", "d"]
                answers[second] = answers[first]
                questions = question_dtos()
                questions[2] = QuestionDto(**question_dict("Q3", answers))

                with self.assertRaises(ValidationError) as cm:
                    validate_unique_answers(questions)

                self.assertEqual(cm.exception.messages, [ANSWERS_NOT_UNIQUE])

    def test_same_answer_in_different_questions_allowed(self):
        questions = [QuestionDto(**question_dict(text, ("yes", "no", "maybe", "never")))
                     for text in ("Q1", "Q2", "Q3", "Q4")]
        validate_unique_answers(questions)


class MappersTestCase(TestCase):

    def test_dto_to_question_uses_given_position_and_quiz(self):
        quiz = make_quiz(number_of_questions=0)
        dto = QuestionDto(**question_dict("Q9", correct="C"), question_number=7)

        question = dto_to_question(dto, quiz_id=quiz.pk, question_number=2)

        self.assertIsNone(question.pk)
        self.assertEqual(question.quiz_id, quiz.pk)
        self.assertEqual(question.question_number, 2)
        self.assertEqual(question.question_text, "Q9")
        self.assertEqual(question.answers, ["a", "b", "c", "d"])
        self.assertEqual(question.correct_answer, "C")

    def test_entities_to_dtos(self):
        quiz = make_quiz(article_id="A7", title="Mapped")
        question = Question.objects.for_quiz(quiz.pk).first()

        quiz_dto = quiz_to_dto(quiz)
        question_dto = question_to_dto(question)

        self.assertEqual(quiz_dto.id, quiz.pk)
        self.assertEqual(quiz_dto.article_id, "A7")
        self.assertEqual(quiz_dto.title, "Mapped")
        self.assertEqual(question_dto.id, question.pk)
        self.assertEqual(question_dto.question_text, "old_question_1")
        self.assertEqual(question_dto.correct_answer, "B")


@patch("quiz.services.get_last_five_articles", return_value=ARTICLES)
class QuizServiceTestCase(TestCase):

    def create_view_dto(self, questions=None, selected_article_id="A1"):
        return CreateQuizViewDto(articles=ARTICLES, selected_article_id=selected_article_id,
                                 questions=questions if questions is not None else question_dtos())

    def test_start_create_seeds_articles(self, articles_mock):
        view_dto = services.start_create()

        self.assertTrue(articles_mock.called)
        self.assertEqual(view_dto.articles, ARTICLES)
        self.assertEqual(view_dto.questions, [])
        self.assertIsNone(view_dto.selected_article_id)
        self.assertIsNone(view_dto.error_message)
        self.assertEqual(Quiz.objects.count(), 0)

    def test_submit_create_saves_quiz_and_questions_in_order(self, articles_mock):
        result = services.submit_create(self.create_view_dto())

        self.assertEqual(result.status, SubmitStatus.SAVED)
        self.assertTrue(result.saved)

        self.assertEqual(Quiz.objects.count(), 1)
        quiz = Quiz.objects.get()
        self.assertEqual(result.quiz_id, quiz.pk)
        self.assertEqual(quiz.article_id, "A1")
        self.assertEqual(quiz.title, "First article")
        self.assertEqual(quiz.summary, "Summary of the first article")

        questions = list(Question.objects.for_quiz(quiz.pk))
        self.assertEqual(len(questions), 4)
        self.assertEqual([q.question_text for q in questions], ["Q1", "Q2", "Q3", "Q4"])
        self.assertEqual([q.question_number for q in questions], [1, 2, 3, 4])
        for question in questions:
            self.assertEqual(question.quiz_id, quiz.pk)
            self.assertEqual(question.answers, ["a", "b", "c", "d"])

    def test_submit_create_replaces_quiz_for_same_article(self, articles_mock):
        old_quiz = make_quiz(article_id="A1")
        other_quiz = make_quiz(article_id="A2", title="Other")

        result = services.submit_create(self.create_view_dto())

        self.assertTrue(result.saved)
        self.assertNotEqual(result.quiz_id, old_quiz.pk)
        self.assertFalse(Quiz.objects.filter(pk=old_quiz.pk).exists())
        self.assertFalse(Question.objects.filter(quiz_id=old_quiz.pk).exists())
        self.assertEqual(Quiz.objects.filter(article_id="A1").count(), 1)
        self.assertEqual(Question.objects.filter(quiz__article_id="A1").count(), 4)

        # Quizzes for other articles are untouched
        self.assertEqual(Question.objects.filter(quiz=other_quiz).count(), 4)

    def test_submit_create_duplicate_questions(self, articles_mock):
        questions = question_dtos(("Q1", "Q2", "Q1", "Q4"))

        result = services.submit_create(self.create_view_dto(questions))

        self.assertEqual(result.status, SubmitStatus.INVALID)
        self.assertEqual(result.view_dto.error_message, "Questions should be unique")
        self.assertEqual([q.question_text for q in result.view_dto.questions], ["Q1", "Q2", "Q1", "Q4"])
        self.assertEqual(result.view_dto.selected_article_id, "A1")
        self.assertIsNone(result.quiz_id)
        self.assertEqual(Quiz.objects.count(), 0)
        self.assertEqual(Question.objects.count(), 0)

    def test_submit_create_duplicate_answers(self, articles_mock):
        for first, second in combinations(range(4), 2):
            with self.subTest(first=ANSWER_FIELDS[first], second=ANSWER_FIELDS[second]):
                answers = ["a", "b", "c", "d"]
                answers[first] = answers[second]
                questions = question_dtos()
                questions[0] = QuestionDto(**question_dict("Q1", answers))

                result = services.submit_create(self.create_view_dto(questions))

                self.assertEqual(result.status, SubmitStatus.INVALID)
                self.assertEqual(result.view_dto.error_message,
                                 "A question cannot have the same answer more than once")
                self.assertEqual(Quiz.objects.count(), 0)
                self.assertEqual(Question.objects.count(), 0)

    def test_submit_create_clears_previous_error_message(self, articles_mock):
        view_dto = self.create_view_dto().model_copy(update={"error_message": "stale"})

        result = services.submit_create(view_dto)

        self.assertTrue(result.saved)
        self.assertIsNone(result.view_dto.error_message)

    def test_submit_create_unknown_article(self, articles_mock):
        result = services.submit_create(self.create_view_dto(selected_article_id="A9"))

        self.assertEqual(result.status, SubmitStatus.ARTICLE_NOT_FOUND)
        self.assertIsNone(result.view_dto.error_message)
        self.assertEqual(result.view_dto.selected_article_id, "A9")
        self.assertEqual(Quiz.objects.count(), 0)

    def test_submit_create_rolls_back_on_database_error(self, articles_mock):
        old_quiz = make_quiz(article_id="A1")

        with patch.object(QuestionQuerySet, "bulk_create", side_effect=DatabaseError("boom")):
            with self.assertRaises(DatabaseError):
                services.submit_create(self.create_view_dto())

        # The replaced quiz is still there and no new quiz was left behind
        self.assertEqual(list(Quiz.objects.values_list("pk", flat=True)), [old_quiz.pk])
        self.assertEqual(Question.objects.filter(quiz=old_quiz).count(), 4)

    def test_start_edit_missing_quiz(self, articles_mock):
        self.assertIsNone(services.start_edit(9999))

    def test_start_edit_prefills_view_dto(self, articles_mock):
        quiz = make_quiz(article_id="A2")

        view_dto = services.start_edit(quiz.pk)

        self.assertEqual(view_dto.quiz_id, quiz.pk)
        self.assertEqual(view_dto.selected_article_id, "A2")
        self.assertEqual(view_dto.articles, ARTICLES)
        self.assertEqual([q.question_text for q in view_dto.questions],
                         ["old_question_1", "old_question_2", "old_question_3", "old_question_4"])
        self.assertIsNone(view_dto.error_message)

    def test_submit_edit_always_leaves_four_questions(self, articles_mock):
        for existing in (0, 3, 4, 6):
            with self.subTest(existing=existing):
                quiz = make_quiz(article_id=f"E{existing}", number_of_questions=existing)
                view_dto = CreateQuizViewDto(quiz_id=quiz.pk, questions=question_dtos(("N1", "N2", "N3", "N4")))

                result = services.submit_edit(view_dto)

                self.assertTrue(result.saved)
                self.assertEqual(result.quiz_id, quiz.pk)
                self.assertEqual(result.view_dto.selected_article_id, f"E{existing}")
                questions = list(Question.objects.for_quiz(quiz.pk))
                self.assertEqual([q.question_text for q in questions], ["N1", "N2", "N3", "N4"])

                quiz.refresh_from_db()
                self.assertEqual(quiz.article_id, f"E{existing}")

    def test_submit_edit_applies_uniqueness_rules(self, articles_mock):
        quiz = make_quiz()

        result = services.submit_edit(CreateQuizViewDto(quiz_id=quiz.pk,
                                                        questions=question_dtos(("N1", "N1", "N3", "N4"))))
        self.assertEqual(result.status, SubmitStatus.INVALID)
        self.assertEqual(result.view_dto.error_message, QUESTIONS_NOT_UNIQUE)

        questions = question_dtos(("N1", "N2", "N3", "N4"))
        questions[3] = QuestionDto(**question_dict("N4", ("a", "b", "c", "c")))
        result = services.submit_edit(CreateQuizViewDto(quiz_id=quiz.pk, questions=questions))
        self.assertEqual(result.status, SubmitStatus.INVALID)
        self.assertEqual(result.view_dto.error_message, ANSWERS_NOT_UNIQUE)

        self.assertEqual([q.question_text for q in Question.objects.for_quiz(quiz.pk)],
                         ["old_question_1", "old_question_2", "old_question_3", "old_question_4"])

    def test_submit_edit_missing_quiz(self, articles_mock):
        result = services.submit_edit(CreateQuizViewDto(quiz_id=9999, questions=question_dtos()))

        self.assertEqual(result.status, SubmitStatus.QUIZ_NOT_FOUND)
        self.assertEqual(Question.objects.count(), 0)

    def test_submit_edit_rolls_back_on_database_error(self, articles_mock):
        quiz = make_quiz()

        with patch.object(QuestionQuerySet, "bulk_create", side_effect=DatabaseError("boom")):
            with self.assertRaises(DatabaseError):
                services.submit_edit(CreateQuizViewDto(quiz_id=quiz.pk, questions=question_dtos()))

        self.assertEqual([q.question_text for q in Question.objects.for_quiz(quiz.pk)],
                         ["old_question_1", "old_question_2", "old_question_3", "old_question_4"])

    def test_list_all(self, articles_mock):
        first = make_quiz(article_id="A1", title="first")
        second = make_quiz(article_id="A2", title="second")

        quiz_list = services.list_all()

        self.assertEqual({q.id for q in quiz_list}, {first.pk, second.pk})
        self.assertEqual(quiz_list[0].id, second.pk)

    def test_delete_quiz(self, articles_mock):
        quiz = make_quiz()

        self.assertFalse(services.delete_quiz(9999))
        self.assertEqual(Quiz.objects.count(), 1)

        self.assertTrue(services.delete_quiz(quiz.pk))
        self.assertEqual(Quiz.objects.count(), 0)
        self.assertEqual(Question.objects.count(), 0)

    def test_get_for_display(self, articles_mock):
        quiz = make_quiz(article_id="A1", title="Shown")
        # Inserted out of order on purpose
        Question.objects.filter(quiz=quiz, question_number=1).update(question_number=5)

        self.assertIsNone(services.get_for_display(9999))

        quiz_view_dto = services.get_for_display(quiz.pk)

        self.assertEqual(quiz_view_dto.quiz.id, quiz.pk)
        self.assertEqual(quiz_view_dto.quiz.title, "Shown")
        self.assertEqual([q.question_text for q in quiz_view_dto.questions],
                         ["old_question_2", "old_question_3", "old_question_4", "old_question_1"])
        self.assertFalse(articles_mock.called)


@patch("quiz.services.get_last_five_articles", return_value=ARTICLES)
class QuizViewsTestCase(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.test_user = User.objects.create_user(username='testuser', password='password')

    def setUp(self):
        # Every test needs a client.
        self.authenticated_client = Client()
        self.authenticated_client.login(username='testuser', password='password')
        self.unauthenticated_client = Client()

    def test_unauthenticated_client_redirected_everywhere(self, articles_mock):
        quiz = make_quiz()
        urls = [
            reverse("index"),
            reverse("get_all_quizzes"),
            reverse("create_quiz"),
            reverse("edit_quiz", args=[quiz.pk]),
            reverse("q_detail", args=[quiz.pk]),
        ]
        for url in urls:
            with self.subTest(url=url):
                response = self.unauthenticated_client.get(url)
                self.assertEqual(response.status_code, 302)
                self.assertTrue(response.url.startswith(reverse("login")))

        response = self.unauthenticated_client.delete(reverse("delete_quiz", args=[quiz.pk]))
        self.assertEqual(response.status_code, 302)
        self.assertTrue(Quiz.objects.filter(pk=quiz.pk).exists())
        self.assertFalse(articles_mock.called)

    def test_authenticated_client_get_quiz_list(self, articles_mock):
        quiz = make_quiz()

        response = self.authenticated_client.get(reverse("index"))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "quiz/index.html")
        self.assertEqual(len(response.context['quizzes']), 1)
        self.assertEqual(response.context['quizzes'][0].id, quiz.pk)

    def test_get_all_quizzes_json(self, articles_mock):
        quiz = make_quiz(article_id="A2", title="json quiz")

        response = self.authenticated_client.get(reverse("get_all_quizzes"))

        self.assertEqual(response.status_code, 200)
        data = json.loads(str(response.content, 'utf-8'))['data']
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]['id'], quiz.pk)
        self.assertEqual(data[0]['article_id'], "A2")
        self.assertEqual(data[0]['title'], "json quiz")

    def test_create_form_get_request(self, articles_mock):
        response = self.authenticated_client.get(reverse("create_quiz"))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "quiz/create_quiz.html")
        self.assertEqual(response.context["view_dto"].articles, ARTICLES)
        self.assertEqual(len(response.context["formset"].forms), 4)
        self.assertContains(response, "First article")

    def test_create_form_article_provider_down(self, articles_mock):
        articles_mock.side_effect = ArticleProviderError("down")

        response = self.authenticated_client.get(reverse("create_quiz"))

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, reverse("index"))

    def test_create_quiz_post_article_provider_down_keeps_submission(self, articles_mock):
        articles_mock.side_effect = ArticleProviderError("down")

        response = self.authenticated_client.post(reverse("create_quiz"), quiz_post_data(question_dicts()))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "quiz/create_quiz.html")
        formset = response.context["formset"]
        self.assertTrue(formset.is_bound)
        self.assertEqual([form["question_text"].value() for form in formset], ["Q1", "Q2", "Q3", "Q4"])
        self.assertEqual(response.context["view_dto"].selected_article_id, "A1")
        self.assertContains(response, "Unable to load articles right now")
        self.assertContains(response, "Q4")
        self.assertEqual(Quiz.objects.count(), 0)

    def test_create_quiz_post_longest_article_id(self, articles_mock):
        long_id = "x" * 64
        articles_mock.return_value = [ArticleDto(article_id=long_id, title="Long id article")]

        response = self.authenticated_client.post(reverse("create_quiz"),
                                                  quiz_post_data(question_dicts(), selected_article_id=long_id))

        self.assertEqual(response.status_code, 302)
        self.assertEqual(Quiz.objects.get().article_id, long_id)

    def test_create_quiz_post_success(self, articles_mock):
        response = self.authenticated_client.post(reverse("create_quiz"), quiz_post_data(question_dicts()))

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, reverse("index"))

        quiz = Quiz.objects.get()
        self.assertEqual(quiz.article_id, "A1")
        self.assertEqual([q.question_text for q in Question.objects.for_quiz(quiz.pk)], ["Q1", "Q2", "Q3", "Q4"])

    def test_create_quiz_post_duplicate_questions(self, articles_mock):
        post_data = quiz_post_data(question_dicts(("Q1", "Q1", "Q3", "Q4")))

        response = self.authenticated_client.post(reverse("create_quiz"), post_data)

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "quiz/create_quiz.html")
        self.assertEqual(response.context["view_dto"].error_message, "Questions should be unique")
        self.assertContains(response, "Questions should be unique")
        self.assertEqual([q.question_text for q in response.context["view_dto"].questions],
                         ["Q1", "Q1", "Q3", "Q4"])
        self.assertEqual(Quiz.objects.count(), 0)

    def test_create_quiz_post_duplicate_answers(self, articles_mock):
        questions = question_dicts()
        questions[1] = question_dict("Q2", ("a", "b", "a", "d"))

        response = self.authenticated_client.post(reverse("create_quiz"), quiz_post_data(questions))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "A question cannot have the same answer more than once")
        self.assertEqual(Quiz.objects.count(), 0)

    def test_create_quiz_post_unknown_article_renders_edit_view(self, articles_mock):
        response = self.authenticated_client.post(reverse("create_quiz"),
                                                  quiz_post_data(question_dicts(), selected_article_id="A9"))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "quiz/edit_quiz.html")
        self.assertIsNone(response.context["view_dto"].error_message)
        self.assertEqual(Quiz.objects.count(), 0)

    def test_create_quiz_post_missing_fields(self, articles_mock):
        questions = question_dicts()
        questions[0]["question_text"] = ""

        response = self.authenticated_client.post(reverse("create_quiz"),
                                                  quiz_post_data(questions, selected_article_id=None))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "quiz/create_quiz.html")
        self.assertIsNone(response.context["view_dto"].error_message)
        self.assertTrue(response.context["form"].errors)
        self.assertFalse(response.context["formset"].is_valid())
        self.assertEqual(Quiz.objects.count(), 0)

    def test_create_quiz_post_too_few_questions(self, articles_mock):
        response = self.authenticated_client.post(reverse("create_quiz"),
                                                  quiz_post_data(question_dicts(("Q1", "Q2", "Q3"))))

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context["formset"].non_form_errors())
        self.assertEqual(Quiz.objects.count(), 0)

    def test_edit_get_request(self, articles_mock):
        quiz = make_quiz(article_id="A2")

        response = self.authenticated_client.get(reverse("edit_quiz", args=[quiz.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "quiz/edit_quiz.html")
        self.assertEqual(response.context["view_dto"].quiz_id, quiz.pk)
        self.assertEqual(response.context["view_dto"].selected_article_id, "A2")
        self.assertEqual(response.context["formset"].forms[0].initial["question_text"], "old_question_1")
        self.assertContains(response, "old_question_4")

    def test_edit_get_missing_quiz_redirects(self, articles_mock):
        response = self.authenticated_client.get(reverse("edit_quiz", args=[9999]))

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, reverse("index"))

    def test_edit_post_success(self, articles_mock):
        quiz = make_quiz(article_id="A2", number_of_questions=2)

        post_data = quiz_post_data(question_dicts(("N1", "N2", "N3", "N4")), selected_article_id="A1")
        response = self.authenticated_client.post(reverse("edit_quiz", args=[quiz.pk]), post_data)

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, reverse("index"))

        quiz.refresh_from_db()
        # Posted article id is ignored on edit
        self.assertEqual(quiz.article_id, "A2")
        self.assertEqual([q.question_text for q in Question.objects.for_quiz(quiz.pk)], ["N1", "N2", "N3", "N4"])
        self.assertFalse(articles_mock.called)

    def test_edit_post_duplicate_questions(self, articles_mock):
        quiz = make_quiz()

        post_data = quiz_post_data(question_dicts(("N1", "N2", "N2", "N4")))
        response = self.authenticated_client.post(reverse("edit_quiz", args=[quiz.pk]), post_data)

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "quiz/edit_quiz.html")
        self.assertContains(response, "Questions should be unique")
        self.assertEqual(Question.objects.filter(quiz=quiz, question_text__startswith="old").count(), 4)

    def test_edit_post_missing_quiz_redirects(self, articles_mock):
        response = self.authenticated_client.post(reverse("edit_quiz", args=[9999]), quiz_post_data(question_dicts()))

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, reverse("index"))
        self.assertEqual(Question.objects.count(), 0)

    def test_delete_quiz_success(self, articles_mock):
        quiz = make_quiz()

        response = self.authenticated_client.delete(reverse("delete_quiz", args=[quiz.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(json.loads(str(response.content, 'utf-8')),
                         {"success": True, "message": "Delete successful"})
        self.assertEqual(Quiz.objects.count(), 0)
        self.assertEqual(Question.objects.count(), 0)

    def test_delete_quiz_not_found(self, articles_mock):
        make_quiz()

        response = self.authenticated_client.post(reverse("delete_quiz", args=[9999]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(json.loads(str(response.content, 'utf-8')),
                         {"success": False, "message": "Error while deleting"})
        self.assertEqual(Quiz.objects.count(), 1)
        self.assertEqual(Question.objects.count(), 4)

    def test_delete_quiz_get_not_allowed(self, articles_mock):
        quiz = make_quiz()

        response = self.authenticated_client.get(reverse("delete_quiz", args=[quiz.pk]))

        self.assertEqual(response.status_code, 405)
        self.assertTrue(Quiz.objects.filter(pk=quiz.pk).exists())

    def test_authenticated_client_get_quiz_detail_data(self, articles_mock):
        quiz = make_quiz(title="Detail quiz")

        response = self.authenticated_client.get(reverse("q_detail", args=[quiz.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "quiz/quiz_detail.html")
        self.assertEqual(response.context['quiz'].id, quiz.pk)
        self.assertEqual(len(response.context['questions']), 4)
        self.assertContains(response, "Detail quiz")

    def test_quiz_detail_missing_redirects(self, articles_mock):
        response = self.authenticated_client.get(reverse("q_detail", args=[9999]))

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, reverse("index"))


class ArticleFetchTransactionTestCase(TransactionTestCase):

    def setUp(self):
        User.objects.create_user(username='testuser', password='password')
        self.authenticated_client = Client()
        self.authenticated_client.login(username='testuser', password='password')
        self.in_atomic_block = []

    def record_transaction_state(self):
        self.in_atomic_block.append(connection.in_atomic_block)
        return ARTICLES

    def test_articles_fetched_outside_a_transaction(self):
        quiz = make_quiz()

        with patch("quiz.services.get_last_five_articles", side_effect=self.record_transaction_state):
            self.authenticated_client.get(reverse("create_quiz"))
            self.authenticated_client.get(reverse("edit_quiz", args=[quiz.pk]))
            response = self.authenticated_client.post(reverse("create_quiz"), quiz_post_data(question_dicts()))

        self.assertEqual(response.status_code, 302)
        self.assertEqual(self.in_atomic_block, [False, False, False])
        self.assertEqual(Question.objects.filter(quiz__article_id="A1").count(), 4)
