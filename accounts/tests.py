from unittest.mock import patch

from django.test import TestCase, Client
from django.contrib.auth.models import User
from django.urls import reverse

from django.contrib.auth import get_user_model
from accounts.backends import CustomBackend
from quiz.models import Quiz

BackendUser = get_user_model()


class AccountsTestCase(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.test_user = User.objects.create_user(username='testuser', password='password',
                                                 email='testuser@gmail.com')
        cls.inactive_user = User.objects.create_user(username='inactivetestuser', password='password2',
                                                     email="inactive_user@gmail.com")
        cls.inactive_user.is_active = False
        cls.inactive_user.save()

    def setUp(self):
        # Every test needs a client.
        self.authenticated_client = Client()
        self.authenticated_client.login(username='testuser', password='password')
        self.unauthenticated_client = Client()

    def test_login_username_password(self):
        response = self.unauthenticated_client.post(reverse("login"), {
            "username": "testuser",
            "password": "password"
        })

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, reverse("home"))
        self.assertTrue("_auth_user_id" in self.unauthenticated_client.session)

    def test_login_email_password(self):
        response = self.unauthenticated_client.post(reverse("login"), {
            "username": "TestUser@gmail.com",
            "password": "password"
        })

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, reverse("home"))
        self.assertTrue("_auth_user_id" in self.unauthenticated_client.session)

    def test_login_redirects_to_next(self):
        response = self.unauthenticated_client.post(f'{reverse("login")}?next={reverse("create_quiz")}', {
            "username": "testuser",
            "password": "password",
            "next": reverse("create_quiz"),
        })

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, reverse("create_quiz"))

    def test_login_wrong_password(self):
        response = self.unauthenticated_client.post(reverse("login"), {
            "username": "testuser",
            "password": "passworddd"
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.template_name[0], "registration/login.html")
        self.assertContains(response, "Please enter a correct")
        self.assertFalse("_auth_user_id" in self.unauthenticated_client.session)

    def test_login_wrong_username(self):
        response = self.unauthenticated_client.post(reverse("login"), {
            "username": "testusera",
            "password": "password"
        })

        self.assertEqual(response.status_code, 200)
        self.assertFalse("_auth_user_id" in self.unauthenticated_client.session)

    def test_login_inactive_user(self):
        response = self.unauthenticated_client.post(reverse("login"), {
            "username": "inactivetestuser",
            "password": "password2"
        })

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Your account is inactive. Please contact support.")
        self.assertFalse("_auth_user_id" in self.unauthenticated_client.session)

    def test_logout(self):
        response = self.authenticated_client.post(reverse("logout"))

        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.url, reverse("login"))
        self.assertFalse("_auth_user_id" in self.authenticated_client.session)

    def test_home_requires_login(self):
        response = self.unauthenticated_client.get(reverse("home"))
        self.assertEqual(response.status_code, 302)

        response = self.authenticated_client.get(reverse("home"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["quiz_count"], 0)

    def test_home_counts_quizzes(self):
        for article_id in ("A1", "A2", "A3"):
            Quiz.objects.create(article_id=article_id, title=f"Quiz {article_id}")

        with patch("quiz.services.quiz_to_dto") as quiz_to_dto:
            response = self.authenticated_client.get(reverse("home"))

        quiz_to_dto.assert_not_called()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["quiz_count"], 3)
        self.assertContains(response, "There are 3 quizzes")


class CustomBackendTest(TestCase):
    def setUp(self):
        self.backend = CustomBackend()
        self.backend_user = BackendUser.objects.create_user(
            username="testuser",
            email="test@example.com",
            password="securepass123"
        )

        self.inactive_user = BackendUser.objects.create_user(username="testuser2", email="test_user_2@example.com",
                                                             password="kkkksskss")
        self.inactive_user.is_active = False
        self.inactive_user.save()

    def test_authenticate_with_username_success(self):
        authenticated_user = self.backend.authenticate(
            request=None, username="testuser", password="securepass123"
        )
        self.assertEqual(authenticated_user, self.backend_user)

    def test_authenticate_with_email_success(self):
        authenticated_user = self.backend.authenticate(
            request=None, username="test@example.com", password="securepass123"
        )
        self.assertEqual(authenticated_user, self.backend_user)

    def test_authenticate_with_wrong_password(self):
        authenticated_user = self.backend.authenticate(
            request=None, username="testuser", password="wrongpassword"
        )
        self.assertIsNone(authenticated_user)

    def test_authenticate_with_invalid_username_or_email(self):
        authenticated_user = self.backend.authenticate(
            request=None, username="doesnotexist", password="whatever"
        )
        self.assertIsNone(authenticated_user)

    def test_authenticate_without_credentials(self):
        self.assertIsNone(self.backend.authenticate(request=None))

    def test_authenticate_inactive_user_is_returned_for_form_check(self):
        inactive_authenticated_user = self.backend.authenticate(
            request=None, username="test_user_2@example.com", password="kkkksskss"
        )
        self.assertEqual(inactive_authenticated_user, self.inactive_user)
        self.assertFalse(inactive_authenticated_user.is_active)

    def test_get_user_valid(self):
        user = self.backend.get_user(self.backend_user.id)
        self.assertEqual(user, self.backend_user)

    def test_get_user_invalid(self):
        user = self.backend.get_user(9999)
        self.assertIsNone(user)

    def test_get_user_inactive(self):
        user = self.backend.get_user(self.inactive_user.id)
        self.assertIsNone(user)
