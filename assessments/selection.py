from __future__ import annotations

import logging
import random
from typing import Iterable, Mapping

from django.conf import settings

from catalog.models import Question

from . import storage
from .constants import CATEGORY_CODES, CATEGORY_QUOTAS

logger = logging.getLogger(__name__)

_random_source: random.Random | None = None


def get_random_source() -> random.Random:
    """Shared generator for production selection.

    Seeded from ``ASSESSMENT_RANDOM_SEED`` when that setting is present so a
    deployment can reproduce question sets.
    """
    global _random_source
    if _random_source is None:
        _random_source = random.Random(getattr(settings, "ASSESSMENT_RANDOM_SEED", None))
    return _random_source


def partition_by_category(questions: Iterable[Question]) -> dict[str, list[Question]]:
    """Group questions into the twelve scoring categories.

    Questions whose section and code do not line up with a known category are
    left out.
    """
    buckets: dict[str, list[Question]] = {code: [] for code in CATEGORY_CODES}
    for question in questions:
        code = question.category_code
        if code in buckets:
            buckets[code].append(question)
    return buckets


def select_assessment_questions(
    questions: Iterable[Question] | None = None,
    *,
    rng: random.Random | None = None,
    quotas: Mapping[str, int] | None = None,
) -> list[int]:
    """Draw a stratified random question set and return it as ordered ids.

    Each category contributes its quota, sampled without replacement. A
    category with fewer questions than its quota contributes all of them. The
    combined ids are shuffled so the category order is not visible.
    """
    if questions is None:
        questions = storage.list_active_questions()
    rng = rng or get_random_source()
    quotas = quotas or CATEGORY_QUOTAS

    buckets = partition_by_category(questions)
    question_ids: list[int] = []
    for category, quota in quotas.items():
        pool = buckets.get(category, [])
        count = min(quota, len(pool))
        if count < quota:
            logger.warning(
                "Category %s has %s active questions; quota is %s",
                category,
                len(pool),
                quota,
            )
        question_ids.extend(q.id for q in rng.sample(pool, count))

    rng.shuffle(question_ids)
    return question_ids
