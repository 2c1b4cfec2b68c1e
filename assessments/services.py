from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from django.conf import settings

from catalog.models import Career, Question

from . import storage
from .constants import (
    RIASEC_CODES,
    SECTION_CODES,
    empty_scores,
    normalize_codes,
)
from .models import Answer, Assessment
from .selection import select_assessment_questions

logger = logging.getLogger(__name__)
DEFAULT_TOP_CODE_COUNT = 2
HOLLAND_CODE_LENGTH = 3


class AssessmentError(Exception):
    """Base error surfaced to the caller with an HTTP status."""

    status_code = 400
    default_detail = "The assessment request could not be processed."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(AssessmentError):
    status_code = 404
    default_detail = "Not found."


class Forbidden(AssessmentError):
    status_code = 403
    default_detail = "You do not have access to this assessment."


class ValidationFailure(AssessmentError):
    status_code = 400
    default_detail = "Invalid input."


@dataclass
class AssessmentView:
    assessment: Assessment
    questions: list[Question]
    answers: list[Answer] = field(default_factory=list)
    recommendations: list[Career] = field(default_factory=list)


@dataclass
class AssessmentOutcome:
    assessment: Assessment
    recommendations: list[Career]
    profile: dict


# Session lifecycle


def create_assessment_session(user, *, rng: random.Random | None = None) -> Assessment:
    """Persist a new in-progress assessment with a freshly drawn question set."""
    question_ids = select_assessment_questions(rng=rng)
    assessment = storage.create_assessment(user, question_ids)
    if not question_ids:
        logger.warning("Assessment %s started with an empty question bank", assessment.pk)
    return assessment


def advance(assessment: Assessment, new_index: int) -> Assessment:
    """Move the resume cursor to an absolute position, forward or backward."""
    return storage.update_assessment_index(assessment, new_index)


def complete(assessment: Assessment) -> Assessment:
    """Score the recorded answers and mark the assessment completed.

    Completing an already completed assessment recomputes and overwrites the
    scores.
    """
    answers = storage.list_answers_with_joins(assessment)
    scores = compute_scores(answers)
    return storage.set_assessment_completed(assessment, scores)


# Answers and scoring


def submit_answer(assessment: Assessment, question_id: int, option_id: int) -> Answer:
    """Record the chosen option; a repeat submission overwrites the earlier choice."""
    return storage.upsert_answer(assessment, question_id, option_id)


def compute_scores(answers: Iterable[Answer]) -> dict[str, int]:
    """Sum option weights per category code.

    Every known category starts at zero. Answers whose question has no
    matching code are ignored.
    """
    scores = empty_scores()
    for answer in answers:
        code = answer.question.category_code
        if code not in scores:
            continue
        scores[code] += answer.option.weight
    return scores


def top_riasec_codes(scores: dict, count: int | None = None) -> list[str]:
    """Return the highest scoring RIASEC codes.

    Equal scores keep the R, I, A, S, E, C order.
    """
    if count is None:
        count = getattr(settings, "RECOMMENDATION_TOP_CODES", DEFAULT_TOP_CODE_COUNT)
    ranked = sorted(RIASEC_CODES, key=lambda code: scores.get(code, 0), reverse=True)
    return ranked[:count]


def match_careers(scores: dict, careers: Sequence[Career] | None = None) -> list[Career]:
    """Careers sharing at least one code with the top RIASEC codes, in catalogue order."""
    if careers is None:
        careers = storage.list_careers()
    top_codes = set(top_riasec_codes(scores))
    return [
        career
        for career in careers
        if top_codes.intersection(normalize_codes(career.required_codes))
    ]


def build_profile_summary(scores: dict) -> dict:
    holland = top_riasec_codes(scores, HOLLAND_CODE_LENGTH)
    summary = {
        "holland_code": "".join(holland),
        "top_codes": top_riasec_codes(scores),
    }
    for section, codes in SECTION_CODES.items():
        summary[section] = {code: scores.get(code, 0) for code in codes}
    return summary


# Access checks


def can_view(assessment: Assessment, user) -> bool:
    return assessment.user_id == user.pk or bool(getattr(user, "is_staff", False))


def ensure_owner(assessment: Assessment, user) -> None:
    if assessment.user_id != user.pk:
        raise Forbidden()


def _coerce_id(value, field_name: str) -> int:
    if isinstance(value, bool) or (
        isinstance(value, float) and not value.is_integer()
    ):
        raise ValidationFailure(f"{field_name} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationFailure(f"{field_name} must be an integer.")


def _load_assessment(assessment_id) -> Assessment:
    assessment = storage.get_assessment(_coerce_id(assessment_id, "assessment_id"))
    if assessment is None:
        raise NotFound("Assessment not found.")
    return assessment


# Boundary operations


def start_assessment(user, *, rng: random.Random | None = None) -> AssessmentView:
    assessment = create_assessment_session(user, rng=rng)
    questions = storage.list_questions_by_ids(assessment.selected_question_ids)
    logger.info(
        "Assessment %s started for user %s with %s questions",
        assessment.pk,
        user.pk,
        len(questions),
    )
    return AssessmentView(assessment=assessment, questions=questions)


def get_assessment_view(assessment_id, requesting_user) -> AssessmentView:
    """Load an assessment with its ordered questions and recorded answers."""
    assessment = _load_assessment(assessment_id)
    if not can_view(assessment, requesting_user):
        raise Forbidden()
    questions = storage.list_questions_by_ids(assessment.selected_question_ids or [])
    answers = storage.list_answers_with_joins(assessment)
    recommendations = []
    if assessment.is_completed and assessment.scores:
        recommendations = match_careers(assessment.scores)
    return AssessmentView(
        assessment=assessment,
        questions=questions,
        answers=answers,
        recommendations=recommendations,
    )


def list_assessments(user) -> list[Assessment]:
    return storage.list_user_assessments(user)


def record_progress(assessment_id, index, *, user) -> Assessment:
    index = _coerce_id(index, "current_question_index")
    assessment = _load_assessment(assessment_id)
    ensure_owner(assessment, user)
    if not 0 <= index <= assessment.question_count:
        logger.warning(
            "Rejected progress index %s for assessment %s (%s questions)",
            index,
            assessment.pk,
            assessment.question_count,
        )
        raise ValidationFailure(
            f"current_question_index must be between 0 and {assessment.question_count}."
        )
    return advance(assessment, index)


def record_answer(assessment_id, question_id, option_id, *, user) -> Answer:
    """Validate and store one answer for the requesting user's assessment."""
    question_id = _coerce_id(question_id, "question_id")
    option_id = _coerce_id(option_id, "option_id")
    assessment = _load_assessment(assessment_id)
    ensure_owner(assessment, user)

    if not storage.question_exists(question_id):
        raise NotFound("Question not found.")
    if question_id not in (assessment.selected_question_ids or []):
        logger.warning(
            "Question %s is not part of assessment %s", question_id, assessment.pk
        )
        raise ValidationFailure("Question is not part of this assessment.")
    if not storage.option_belongs_to(option_id, question_id):
        logger.warning(
            "Option %s does not belong to question %s", option_id, question_id
        )
        raise ValidationFailure("Option does not belong to this question.")

    return submit_answer(assessment, question_id, option_id)


def finish_assessment(assessment_id, *, user) -> AssessmentOutcome:
    assessment = _load_assessment(assessment_id)
    ensure_owner(assessment, user)
    assessment = complete(assessment)
    recommendations = match_careers(assessment.scores)
    logger.info(
        "Assessment %s completed; top codes %s, %s recommendations",
        assessment.pk,
        top_riasec_codes(assessment.scores),
        len(recommendations),
    )
    return AssessmentOutcome(
        assessment=assessment,
        recommendations=recommendations,
        profile=build_profile_summary(assessment.scores),
    )
