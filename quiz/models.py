from django.db import models

from articles.schemas import ARTICLE_ID_MAX_LENGTH

QUESTIONS_PER_QUIZ = 4

ANSWER_CHOICES = [
    ('A', 'A'),
    ('B', 'B'),
    ('C', 'C'),
    ('D', 'D'),
]


class QuizQuerySet(models.QuerySet):

    def replace_for_article(self, article):
        """
        Create the quiz for an article, replacing any quiz already built from it.
        Questions of the replaced quiz go with it (cascade). Call inside a transaction.
        """
        self.filter(article_id=article.article_id).delete()
        return self.create(article_id=article.article_id, title=article.title, summary=article.summary)


class Quiz(models.Model):
    article_id = models.CharField(max_length=ARTICLE_ID_MAX_LENGTH)
    title = models.CharField(max_length=255)
    summary = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = QuizQuerySet.as_manager()

    class Meta:
        verbose_name_plural = 'Quizzes'
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(fields=['article_id'], name='unique_quiz_per_article')
        ]

    def __str__(self):
        return self.title


class QuestionQuerySet(models.QuerySet):

    def for_quiz(self, quiz_id):
        return self.filter(quiz_id=quiz_id).order_by('question_number', 'id')


class Question(models.Model):
    question_text = models.TextField()
    quiz = models.ForeignKey(Quiz, related_name='questions', on_delete=models.CASCADE)
    question_number = models.IntegerField(default=0)
    answer_a = models.CharField(max_length=255)
    answer_b = models.CharField(max_length=255)
    answer_c = models.CharField(max_length=255)
    answer_d = models.CharField(max_length=255)
    correct_answer = models.CharField(max_length=1, choices=ANSWER_CHOICES, default='A')

    objects = QuestionQuerySet.as_manager()

    class Meta:
        ordering = ['question_number', 'id']

    def __str__(self):
        return f"{self.question_text[:50]}..." if len(self.question_text) > 50 else self.question_text

    @property
    def answers(self):
        return [self.answer_a, self.answer_b, self.answer_c, self.answer_d]
