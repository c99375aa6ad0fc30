from django.contrib.auth.mixins import LoginRequiredMixin
from django.views.generic.base import TemplateView

from quiz.models import Quiz


class HomePageView(LoginRequiredMixin, TemplateView):
    template_name = 'homepage.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['quiz_count'] = Quiz.objects.count()
        return context
