from django.contrib import admin

from . import models


class AnswerInline(admin.TabularInline):
    model = models.Answer
    extra = 0
    raw_id_fields = ("question", "option")


@admin.register(models.Assessment)
class AssessmentAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "status",
        "current_question_index",
        "started_at",
        "completed_at",
    )
    list_filter = ("status",)
    search_fields = ("user__username", "user__email")
    readonly_fields = ("selected_question_ids", "scores", "started_at", "completed_at")
    inlines = [AnswerInline]


@admin.register(models.Answer)
class AnswerAdmin(admin.ModelAdmin):
    list_display = ("assessment", "question", "option", "answered_at")
    list_filter = ("question__section",)
    raw_id_fields = ("assessment", "question", "option")
