from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models


class TimeStampedModel(models.Model):
    """Base class to track creation and modification times."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class QuestionQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class Question(TimeStampedModel):
    """A single questionnaire statement measuring one category."""

    SECTION_INTEREST = "INTEREST"
    SECTION_APTITUDE = "APTITUDE"
    SECTION_PERSONALITY = "PERSONALITY"
    SECTION_CHOICES = [
        (SECTION_INTEREST, "Interest"),
        (SECTION_APTITUDE, "Aptitude"),
        (SECTION_PERSONALITY, "Personality"),
    ]

    RIASEC_CHOICES = [
        ("R", "Realistic"),
        ("I", "Investigative"),
        ("A", "Artistic"),
        ("S", "Social"),
        ("E", "Enterprising"),
        ("C", "Conventional"),
    ]

    SUBCATEGORY_LOGICAL = "LOGICAL"
    SUBCATEGORY_NUMERICAL = "NUMERICAL"
    SUBCATEGORY_VERBAL = "VERBAL"
    SUBCATEGORY_LEADERSHIP = "LEADERSHIP"
    SUBCATEGORY_TEAMWORK = "TEAMWORK"
    SUBCATEGORY_DISCIPLINE = "DISCIPLINE"
    SUBCATEGORY_CHOICES = [
        (SUBCATEGORY_LOGICAL, "Logical reasoning"),
        (SUBCATEGORY_NUMERICAL, "Numerical ability"),
        (SUBCATEGORY_VERBAL, "Verbal ability"),
        (SUBCATEGORY_LEADERSHIP, "Leadership"),
        (SUBCATEGORY_TEAMWORK, "Teamwork"),
        (SUBCATEGORY_DISCIPLINE, "Discipline"),
    ]

    SECTION_SUBCATEGORIES = {
        SECTION_APTITUDE: {
            SUBCATEGORY_LOGICAL,
            SUBCATEGORY_NUMERICAL,
            SUBCATEGORY_VERBAL,
        },
        SECTION_PERSONALITY: {
            SUBCATEGORY_LEADERSHIP,
            SUBCATEGORY_TEAMWORK,
            SUBCATEGORY_DISCIPLINE,
        },
    }

    text = models.TextField()
    section = models.CharField(max_length=16, choices=SECTION_CHOICES)
    riasec_code = models.CharField(
        max_length=1,
        choices=RIASEC_CHOICES,
        blank=True,
        help_text="Interest questions only.",
    )
    subcategory = models.CharField(
        max_length=16,
        choices=SUBCATEGORY_CHOICES,
        blank=True,
        help_text="Aptitude and personality questions only.",
    )
    is_active = models.BooleanField(default=True)
    display_order = models.PositiveIntegerField(default=0)

    objects = QuestionQuerySet.as_manager()

    class Meta:
        ordering = ("display_order", "id")

    def __str__(self) -> str:
        return self.text[:80]

    @property
    def category_code(self) -> str:
        """Return the scoring bucket this question feeds, or an empty string."""
        if self.section == self.SECTION_INTEREST:
            return self.riasec_code or ""
        if self.section in self.SECTION_SUBCATEGORIES:
            return self.subcategory or ""
        return ""

    def clean(self):
        super().clean()
        if self.section == self.SECTION_INTEREST:
            if not self.riasec_code:
                raise ValidationError({"riasec_code": "Interest questions need a RIASEC code."})
            if self.subcategory:
                raise ValidationError({"subcategory": "Interest questions cannot carry a subcategory."})
        elif self.section in self.SECTION_SUBCATEGORIES:
            if self.riasec_code:
                raise ValidationError({"riasec_code": "Only interest questions carry a RIASEC code."})
            if self.subcategory not in self.SECTION_SUBCATEGORIES[self.section]:
                raise ValidationError(
                    {"subcategory": f"Choose a subcategory that belongs to {self.get_section_display()}."}
                )


class Option(models.Model):
    """Likert-style answer option; its weight is added to the question's category."""

    question = models.ForeignKey(
        Question, related_name="options", on_delete=models.CASCADE
    )
    text = models.CharField(max_length=255)
    weight = models.IntegerField(
        help_text="Contribution to the category score when this option is chosen.",
    )
    display_order = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ("question", "display_order", "id")

    def __str__(self) -> str:
        return f"{self.text} ({self.weight})"


class Career(TimeStampedModel):
    """Recommendation target tagged with the RIASEC codes it suits."""

    title = models.CharField(max_length=160)
    description = models.TextField()
    stream = models.CharField(max_length=60)
    required_codes = models.JSONField(
        default=list,
        blank=True,
        help_text='RIASEC codes such as ["I", "R"].',
    )
    typical_degree = models.CharField(max_length=160, blank=True)

    class Meta:
        ordering = ("id",)

    def __str__(self) -> str:
        return self.title


class EngineeringBranch(models.Model):
    slug = models.SlugField(unique=True)
    name = models.CharField(max_length=160)
    description = models.TextField(blank=True)
    broad_work_area = models.CharField(max_length=120, blank=True)

    class Meta:
        ordering = ("name",)
        verbose_name_plural = "engineering branches"

    def __str__(self) -> str:
        return self.name


class ProgrammeQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class Programme(models.Model):
    """Undergraduate degree programme, optionally tied to an engineering branch."""

    STREAM_CHOICES = [
        ("ARTS", "Arts"),
        ("SCIENCE", "Science"),
        ("COMMERCE", "Commerce"),
        ("ENGINEERING", "Engineering"),
        ("MANAGEMENT", "Management"),
        ("SOCIAL_WORK", "Social work"),
    ]

    branch = models.ForeignKey(
        EngineeringBranch,
        null=True,
        blank=True,
        related_name="programmes",
        on_delete=models.SET_NULL,
    )
    stream = models.CharField(max_length=20, choices=STREAM_CHOICES)
    degree_level = models.CharField(max_length=40, default="Undergraduate")
    degree_type = models.CharField(max_length=40)
    full_name = models.CharField(max_length=200)
    duration_years = models.PositiveSmallIntegerField(default=4)
    short_description = models.TextField(blank=True)
    eligibility_12th_stream = models.CharField(max_length=120, blank=True)
    key_tags = models.JSONField(default=list, blank=True)
    ai_recommended = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    objects = ProgrammeQuerySet.as_manager()

    class Meta:
        ordering = ("stream", "full_name")

    def __str__(self) -> str:
        return self.full_name
