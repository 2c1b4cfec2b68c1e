"""
ORM-backed persistence used by the assessment engine.

Every read or write the engine performs against the database goes through
these functions so the scoring and selection logic stays free of query code.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from django.utils import timezone

from catalog.models import Career, Option, Question

from .models import Answer, Assessment


def list_active_questions() -> list[Question]:
    return list(Question.objects.active().prefetch_related("options"))


def list_questions_by_ids(ids: Sequence[int]) -> list[Question]:
    """Return questions with their options, in the order of ``ids``.

    Ids that no longer exist are skipped.
    """
    if not ids:
        return []
    question_map = {
        q.id: q
        for q in Question.objects.filter(id__in=ids).prefetch_related("options")
    }
    return [question_map[qid] for qid in ids if qid in question_map]


def question_exists(question_id: int) -> bool:
    return Question.objects.filter(pk=question_id).exists()


def option_belongs_to(option_id: int, question_id: int) -> bool:
    return Option.objects.filter(pk=option_id, question_id=question_id).exists()


def create_assessment(user, selected_ids: Iterable[int]) -> Assessment:
    return Assessment.objects.create(
        user=user,
        status=Assessment.STATUS_IN_PROGRESS,
        started_at=timezone.now(),
        selected_question_ids=list(selected_ids),
        current_question_index=0,
    )


def get_assessment(assessment_id: int) -> Assessment | None:
    return Assessment.objects.select_related("user").filter(pk=assessment_id).first()


def list_user_assessments(user) -> list[Assessment]:
    return list(Assessment.objects.filter(user=user).order_by("-started_at", "-id"))


def update_assessment_index(assessment: Assessment, index: int) -> Assessment:
    assessment.current_question_index = index
    assessment.save(update_fields=["current_question_index", "updated_at"])
    return assessment


def upsert_answer(assessment: Assessment, question_id: int, option_id: int) -> Answer:
    """Insert or overwrite the answer keyed by (assessment, question)."""
    answer, _ = Answer.objects.update_or_create(
        assessment=assessment,
        question_id=question_id,
        defaults={"option_id": option_id},
    )
    return answer


def list_answers_with_joins(assessment: Assessment) -> list[Answer]:
    """Answers with their chosen option and question loaded."""
    return list(
        Answer.objects.filter(assessment=assessment)
        .select_related("option", "question")
        .order_by("id")
    )


def set_assessment_completed(assessment: Assessment, scores: dict) -> Assessment:
    assessment.status = Assessment.STATUS_COMPLETED
    assessment.completed_at = timezone.now()
    assessment.scores = dict(scores)
    assessment.save(update_fields=["status", "completed_at", "scores", "updated_at"])
    return assessment


def list_careers() -> list[Career]:
    return list(Career.objects.order_by("id"))
