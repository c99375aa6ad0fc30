from django.urls import path
from django.contrib.auth.views import LoginView, LogoutView

from accounts.forms import CustomAuthenticationForm

urlpatterns = [
    path("login/", LoginView.as_view(
            authentication_form=CustomAuthenticationForm,
            template_name="registration/login.html",
            redirect_authenticated_user=True,
        ), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
]
