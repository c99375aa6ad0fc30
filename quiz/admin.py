from django.contrib import admin
from django.db.models import Count
from quiz.models import Quiz, Question


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 0
    ordering = ('question_number',)


class QuizAdmin(admin.ModelAdmin):
    list_display = ('title', 'article_id', 'question_count', 'updated_at')
    search_fields = ('title', 'article_id')
    readonly_fields = ('created_at', 'updated_at')
    inlines = [QuestionInline]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(question_count=Count('questions'))

    @admin.display(ordering='question_count')
    def question_count(self, obj):
        return obj.question_count


class QuestionAdmin(admin.ModelAdmin):
    list_display = ('question_text', 'quiz', 'question_number', 'correct_answer')
    list_filter = ('quiz',)


admin.site.register(Quiz, QuizAdmin)
admin.site.register(Question, QuestionAdmin)
