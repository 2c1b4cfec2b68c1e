from django.conf import settings
from django.db import models

from catalog.models import Option, Question


class TimeStampedModel(models.Model):
    """Base class to track creation and modification times."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Assessment(TimeStampedModel):
    """One questionnaire attempt with a frozen, randomly selected question set."""

    STATUS_IN_PROGRESS = "in_progress"
    STATUS_COMPLETED = "completed"
    STATUS_CHOICES = [
        (STATUS_IN_PROGRESS, "In progress"),
        (STATUS_COMPLETED, "Completed"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="career_assessments",
        on_delete=models.CASCADE,
    )
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_IN_PROGRESS
    )
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    selected_question_ids = models.JSONField(
        default=list,
        blank=True,
        help_text="Ordered question ids chosen when the assessment started.",
    )
    current_question_index = models.IntegerField(default=0)
    scores = models.JSONField(
        null=True,
        blank=True,
        help_text="Category code to accumulated option weight, set on completion.",
    )

    class Meta:
        ordering = ("-started_at", "-id")

    def __str__(self):
        return f"Assessment #{self.pk} · {self.user}"

    @property
    def is_completed(self) -> bool:
        return self.status == self.STATUS_COMPLETED

    @property
    def question_count(self) -> int:
        return len(self.selected_question_ids or [])


class Answer(models.Model):
    """The option a user chose for one question of an assessment."""

    assessment = models.ForeignKey(
        Assessment, related_name="answers", on_delete=models.CASCADE
    )
    question = models.ForeignKey(
        Question, related_name="answers", on_delete=models.CASCADE
    )
    option = models.ForeignKey(
        Option, related_name="answers", on_delete=models.CASCADE
    )
    answered_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("id",)
        constraints = [
            models.UniqueConstraint(
                fields=["assessment", "question"],
                name="unique_answer_per_assessment_question",
            )
        ]

    def __str__(self):
        return f"Answer · {self.assessment_id} · Q{self.question_id}"
