from django.urls import path

from . import views

urlpatterns = [
    path("", views.QuizListView.as_view(), name="index"),
    path('all', views.get_all_quizzes, name='get_all_quizzes'),
    path('<int:pk>', views.get_quiz_data, name='q_detail'),
    path('create', views.create_quiz, name='create_quiz'),
    path('edit/<int:pk>', views.edit_quiz, name='edit_quiz'),
    path('delete/<int:pk>', views.delete_quiz, name='delete_quiz'),
]
