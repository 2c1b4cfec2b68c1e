import json
import random
from collections import Counter

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse

from assessments import services, storage
from assessments.constants import (
    APTITUDE_CODES,
    ASSESSMENT_SIZE,
    CATEGORY_CODES,
    CATEGORY_QUOTAS,
    RIASEC_CODES,
)
from assessments.models import Answer, Assessment
from assessments.selection import partition_by_category, select_assessment_questions
from catalog.models import Career, Option, Question


def _section_for(code):
    if code in RIASEC_CODES:
        return Question.SECTION_INTEREST
    if code in APTITUDE_CODES:
        return Question.SECTION_APTITUDE
    return Question.SECTION_PERSONALITY


def create_question(code, text=None, weights=(1, 2, 3, 4, 5), is_active=True):
    section = _section_for(code)
    question = Question.objects.create(
        text=text or f"{code} statement",
        section=section,
        riasec_code=code if section == Question.SECTION_INTEREST else "",
        subcategory="" if section == Question.SECTION_INTEREST else code,
        is_active=is_active,
    )
    for order, weight in enumerate(weights, start=1):
        Option.objects.create(
            question=question, text=f"Option {weight}", weight=weight, display_order=order
        )
    return question


def build_question_bank(per_category=5, counts=None):
    counts = counts or {}
    bank = {}
    for code in CATEGORY_CODES:
        bank[code] = [
            create_question(code, text=f"{code} statement {index}")
            for index in range(counts.get(code, per_category))
        ]
    return bank


def option_with_weight(question, weight):
    return question.options.get(weight=weight)


class StratifiedSelectionTests(TestCase):
    def test_full_catalogue_fills_every_quota(self):
        bank = build_question_bank()
        selected = select_assessment_questions(rng=random.Random(7))

        self.assertEqual(len(selected), ASSESSMENT_SIZE)
        self.assertEqual(len(selected), 40)
        self.assertEqual(len(set(selected)), 40)
        code_by_id = {q.id: code for code, questions in bank.items() for q in questions}
        self.assertEqual(Counter(code_by_id[qid] for qid in selected), Counter(CATEGORY_QUOTAS))

    def test_short_category_contributes_everything_it_has(self):
        bank = build_question_bank(counts={"VERBAL": 1, "R": 0})
        selected = select_assessment_questions(rng=random.Random(3))

        self.assertEqual(len(selected), 40 - 1 - 4)
        self.assertIn(bank["VERBAL"][0].id, selected)

    def test_empty_catalogue_yields_no_questions(self):
        self.assertEqual(select_assessment_questions(rng=random.Random(1)), [])

    def test_inactive_questions_are_never_selected(self):
        build_question_bank()
        hidden = create_question("R", text="Hidden", is_active=False)
        for seed in range(5):
            self.assertNotIn(hidden.id, select_assessment_questions(rng=random.Random(seed)))

    def test_same_seed_reproduces_order(self):
        build_question_bank()
        first = select_assessment_questions(rng=random.Random(42))
        second = select_assessment_questions(rng=random.Random(42))
        self.assertEqual(first, second)

    def test_partition_skips_questions_without_code(self):
        build_question_bank(per_category=1)
        orphan = Question.objects.create(text="No code", section=Question.SECTION_APTITUDE)
        buckets = partition_by_category(Question.objects.all())
        self.assertEqual(sorted(buckets), sorted(CATEGORY_CODES))
        self.assertTrue(all(orphan not in questions for questions in buckets.values()))


class AssessmentSessionTests(TestCase):
    def setUp(self):
        self.bank = build_question_bank()
        self.user = get_user_model().objects.create_user("asha", password="pass12345")

    def test_start_creates_in_progress_assessment(self):
        view = services.start_assessment(self.user, rng=random.Random(11))
        assessment = view.assessment

        self.assertEqual(assessment.status, Assessment.STATUS_IN_PROGRESS)
        self.assertEqual(assessment.current_question_index, 0)
        self.assertIsNone(assessment.scores)
        self.assertIsNotNone(assessment.started_at)
        self.assertEqual([q.id for q in view.questions], assessment.selected_question_ids)

    def test_start_with_empty_catalogue_does_not_fail(self):
        Question.objects.all().delete()
        view = services.start_assessment(self.user, rng=random.Random(1))
        self.assertEqual(view.assessment.selected_question_ids, [])
        self.assertEqual(view.questions, [])

    def test_question_order_is_frozen(self):
        view = services.start_assessment(self.user, rng=random.Random(5))
        first = services.get_assessment_view(view.assessment.pk, self.user)
        second = services.get_assessment_view(view.assessment.pk, self.user)
        self.assertEqual([q.id for q in first.questions], [q.id for q in second.questions])
        self.assertEqual(
            [q.id for q in first.questions], view.assessment.selected_question_ids
        )

    def test_advance_moves_forward_and_backward(self):
        assessment = services.create_assessment_session(self.user, rng=random.Random(2))
        for index in (5, 2, 5):
            services.record_progress(assessment.pk, index, user=self.user)
            assessment.refresh_from_db()
            self.assertEqual(assessment.current_question_index, index)

    def test_core_advance_does_not_range_check(self):
        assessment = services.create_assessment_session(self.user, rng=random.Random(2))
        services.advance(assessment, 99)
        assessment.refresh_from_db()
        self.assertEqual(assessment.current_question_index, 99)

    def test_progress_outside_question_range_is_rejected(self):
        assessment = services.create_assessment_session(self.user, rng=random.Random(2))
        with self.assertRaises(services.ValidationFailure):
            services.record_progress(assessment.pk, 41, user=self.user)
        with self.assertRaises(services.ValidationFailure):
            services.record_progress(assessment.pk, -1, user=self.user)
        services.record_progress(assessment.pk, 40, user=self.user)

    def test_progress_requires_owner(self):
        other = get_user_model().objects.create_user("ravi", password="pass12345")
        assessment = services.create_assessment_session(self.user, rng=random.Random(2))
        with self.assertRaises(services.Forbidden):
            services.record_progress(assessment.pk, 1, user=other)

    def test_unknown_assessment_is_not_found(self):
        with self.assertRaises(services.NotFound):
            services.get_assessment_view(9999, self.user)

    def test_non_integer_id_is_rejected_before_lookup(self):
        with self.assertRaises(services.ValidationFailure):
            services.get_assessment_view("abc", self.user)

    def test_fractional_values_are_rejected_not_truncated(self):
        assessment = services.create_assessment_session(self.user, rng=random.Random(2))
        question_id = assessment.selected_question_ids[0]
        option = Option.objects.filter(question_id=question_id).first()

        with self.assertRaises(services.ValidationFailure):
            services.record_progress(assessment.pk, 2.9, user=self.user)
        with self.assertRaises(services.ValidationFailure):
            services.record_answer(
                assessment.pk, question_id + 0.5, option.pk, user=self.user
            )
        with self.assertRaises(services.ValidationFailure):
            services.record_answer(assessment.pk, question_id, 2.9, user=self.user)

        assessment.refresh_from_db()
        self.assertEqual(assessment.current_question_index, 0)
        self.assertFalse(Answer.objects.filter(assessment=assessment).exists())

        services.record_progress(assessment.pk, 3.0, user=self.user)
        assessment.refresh_from_db()
        self.assertEqual(assessment.current_question_index, 3)

    def test_core_advance_accepts_negative_index(self):
        assessment = services.create_assessment_session(self.user, rng=random.Random(2))
        services.advance(assessment, -1)
        assessment.refresh_from_db()
        self.assertEqual(assessment.current_question_index, -1)

    def test_staff_can_view_but_not_mutate(self):
        staff = get_user_model().objects.create_user(
            "admin", password="pass12345", is_staff=True
        )
        assessment = services.create_assessment_session(self.user, rng=random.Random(2))
        view = services.get_assessment_view(assessment.pk, staff)
        self.assertEqual(view.assessment.pk, assessment.pk)
        with self.assertRaises(services.Forbidden):
            services.finish_assessment(assessment.pk, user=staff)


class AnswerRecorderTests(TestCase):
    def setUp(self):
        self.bank = build_question_bank()
        self.user = get_user_model().objects.create_user("mei", password="pass12345")
        self.assessment = services.create_assessment_session(
            self.user, rng=random.Random(9)
        )
        self.question = Question.objects.get(pk=self.assessment.selected_question_ids[0])

    def test_second_submission_overwrites_first(self):
        first = option_with_weight(self.question, 2)
        second = option_with_weight(self.question, 5)
        services.record_answer(self.assessment.pk, self.question.pk, first.pk, user=self.user)
        answer = services.record_answer(
            self.assessment.pk, self.question.pk, second.pk, user=self.user
        )

        rows = Answer.objects.filter(assessment=self.assessment, question=self.question)
        self.assertEqual(rows.count(), 1)
        self.assertEqual(rows.get().option_id, second.pk)
        self.assertEqual(answer.option_id, second.pk)

    def test_question_outside_assessment_is_rejected(self):
        outsider = Question.objects.exclude(
            pk__in=self.assessment.selected_question_ids
        ).first()
        with self.assertRaises(services.ValidationFailure):
            services.record_answer(
                self.assessment.pk,
                outsider.pk,
                outsider.options.first().pk,
                user=self.user,
            )
        self.assertFalse(Answer.objects.exists())

    def test_option_from_another_question_is_rejected(self):
        other = Question.objects.get(pk=self.assessment.selected_question_ids[1])
        with self.assertRaises(services.ValidationFailure):
            services.record_answer(
                self.assessment.pk,
                self.question.pk,
                other.options.first().pk,
                user=self.user,
            )

    def test_unknown_question_is_not_found(self):
        with self.assertRaises(services.NotFound):
            services.record_answer(self.assessment.pk, 123456, 1, user=self.user)

    def test_non_owner_cannot_answer(self):
        other = get_user_model().objects.create_user("tom", password="pass12345")
        with self.assertRaises(services.Forbidden):
            services.record_answer(
                self.assessment.pk,
                self.question.pk,
                self.question.options.first().pk,
                user=other,
            )

    def test_existence_checks(self):
        option = self.question.options.first()
        other = Question.objects.get(pk=self.assessment.selected_question_ids[1])
        self.assertTrue(storage.question_exists(self.question.pk))
        self.assertFalse(storage.question_exists(123456))
        self.assertTrue(storage.option_belongs_to(option.pk, self.question.pk))
        self.assertFalse(storage.option_belongs_to(option.pk, other.pk))

    def test_recorder_trusts_its_caller(self):
        outsider = Question.objects.exclude(
            pk__in=self.assessment.selected_question_ids
        ).first()
        answer = services.submit_answer(
            self.assessment, outsider.pk, outsider.options.first().pk
        )
        self.assertEqual(answer.question_id, outsider.pk)


class ScoringTests(TestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user("lee", password="pass12345")

    def test_weights_accumulate_per_category(self):
        r_one = create_question("R")
        r_two = create_question("R")
        logical = create_question("LOGICAL")
        assessment = storage.create_assessment(self.user, [r_one.pk, r_two.pk, logical.pk])
        storage.upsert_answer(assessment, r_one.pk, option_with_weight(r_one, 4).pk)
        storage.upsert_answer(assessment, r_two.pk, option_with_weight(r_two, 3).pk)
        storage.upsert_answer(assessment, logical.pk, option_with_weight(logical, 5).pk)

        scores = services.compute_scores(storage.list_answers_with_joins(assessment))

        self.assertEqual(
            scores,
            {
                "R": 7,
                "I": 0,
                "A": 0,
                "S": 0,
                "E": 0,
                "C": 0,
                "LOGICAL": 5,
                "NUMERICAL": 0,
                "VERBAL": 0,
                "LEADERSHIP": 0,
                "TEAMWORK": 0,
                "DISCIPLINE": 0,
            },
        )

    def test_answers_without_category_are_ignored(self):
        orphan = Question.objects.create(text="No code", section=Question.SECTION_PERSONALITY)
        option = Option.objects.create(question=orphan, text="Yes", weight=5)
        assessment = storage.create_assessment(self.user, [orphan.pk])
        storage.upsert_answer(assessment, orphan.pk, option.pk)

        scores = services.compute_scores(storage.list_answers_with_joins(assessment))
        self.assertEqual(set(scores.values()), {0})
        self.assertEqual(len(scores), 12)

    def test_finishing_twice_recomputes_identical_scores(self):
        question = create_question("S")
        assessment = storage.create_assessment(self.user, [question.pk])
        storage.upsert_answer(assessment, question.pk, option_with_weight(question, 4).pk)

        first = services.finish_assessment(assessment.pk, user=self.user)
        second = services.finish_assessment(assessment.pk, user=self.user)

        self.assertEqual(first.assessment.scores, second.assessment.scores)
        self.assertEqual(second.assessment.scores["S"], 4)
        self.assertEqual(second.assessment.status, Assessment.STATUS_COMPLETED)
        self.assertIsNotNone(second.assessment.completed_at)


class RecommendationTests(TestCase):
    def setUp(self):
        self.scores = {
            "R": 10,
            "I": 8,
            "A": 2,
            "S": 1,
            "E": 0,
            "C": 0,
            "LOGICAL": 0,
            "NUMERICAL": 0,
            "VERBAL": 0,
            "LEADERSHIP": 0,
            "TEAMWORK": 0,
            "DISCIPLINE": 0,
        }
        self.engineer = Career.objects.create(
            title="Engineer", description="", stream="Science", required_codes=["R", "I"]
        )
        self.artist = Career.objects.create(
            title="Artist", description="", stream="Arts", required_codes=["A"]
        )
        self.clerk = Career.objects.create(
            title="Counsellor", description="", stream="Arts", required_codes=["C", "S"]
        )

    def test_top_two_codes(self):
        self.assertEqual(services.top_riasec_codes(self.scores), ["R", "I"])

    def test_only_overlapping_careers_are_recommended(self):
        self.assertEqual(services.match_careers(self.scores), [self.engineer])

    def test_partial_overlap_qualifies(self):
        scores = dict(self.scores, S=9)
        self.assertEqual(services.top_riasec_codes(scores), ["R", "S"])
        self.assertEqual(services.match_careers(scores), [self.engineer, self.clerk])

    def test_ties_follow_riasec_order(self):
        self.assertEqual(services.top_riasec_codes({}), ["R", "I"])
        self.assertEqual(
            services.top_riasec_codes({"C": 3, "A": 3, "E": 1}), ["A", "C"]
        )

    @override_settings(RECOMMENDATION_TOP_CODES=3)
    def test_top_code_count_follows_settings(self):
        self.assertEqual(services.top_riasec_codes(self.scores), ["R", "I", "A"])
        self.assertEqual(
            services.match_careers(self.scores), [self.engineer, self.artist]
        )

    def test_careers_without_codes_never_match(self):
        Career.objects.create(title="Open", description="", stream="Any", required_codes=[])
        self.assertEqual(services.match_careers(self.scores), [self.engineer])

    def test_profile_summary(self):
        profile = services.build_profile_summary(self.scores)
        self.assertEqual(profile["holland_code"], "RIA")
        self.assertEqual(profile["top_codes"], ["R", "I"])
        self.assertEqual(profile["interest"]["R"], 10)
        self.assertEqual(set(profile["aptitude"]), {"LOGICAL", "NUMERICAL", "VERBAL"})
        self.assertEqual(
            set(profile["personality"]), {"LEADERSHIP", "TEAMWORK", "DISCIPLINE"}
        )


class AssessmentApiTests(TestCase):
    def setUp(self):
        build_question_bank()
        Career.objects.create(
            title="Software Engineer",
            description="Builds apps.",
            stream="Science",
            required_codes=["I", "R"],
        )
        User = get_user_model()
        self.user = User.objects.create_user("priya", password="pass12345")
        self.other = User.objects.create_user("arjun", password="pass12345")
        self.client.force_login(self.user)

    def _post_json(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type="application/json")

    def _start(self):
        response = self.client.post(reverse("assessments:list"))
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_full_flow(self):
        data = self._start()
        self.assertEqual(len(data["questions"]), 40)
        self.assertEqual(data["status"], "in_progress")
        assessment_id = data["id"]

        for position, question in enumerate(data["questions"]):
            top = max(question["options"], key=lambda option: option["weight"])
            response = self._post_json(
                reverse("assessments:answers", args=[assessment_id]),
                {"question_id": question["id"], "option_id": top["id"]},
            )
            self.assertEqual(response.status_code, 200)
            response = self._post_json(
                reverse("assessments:progress", args=[assessment_id]),
                {"current_question_index": position + 1},
            )
            self.assertEqual(response.status_code, 200)

        response = self.client.post(reverse("assessments:complete", args=[assessment_id]))
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["assessment"]["status"], "completed")
        self.assertEqual(payload["assessment"]["scores"]["R"], 20)
        self.assertEqual(payload["assessment"]["scores"]["VERBAL"], 10)
        self.assertEqual(payload["profile"]["top_codes"], ["R", "I"])
        self.assertEqual(
            [career["title"] for career in payload["recommendations"]],
            ["Software Engineer"],
        )

        detail = self.client.get(reverse("assessments:detail", args=[assessment_id])).json()
        self.assertEqual(len(detail["answers"]), 40)
        self.assertEqual(detail["current_question_index"], 40)
        self.assertEqual(len(detail["recommendations"]), 1)

    def test_detail_returns_frozen_order(self):
        data = self._start()
        url = reverse("assessments:detail", args=[data["id"]])
        first = self.client.get(url).json()
        second = self.client.get(url).json()
        self.assertEqual(
            [q["id"] for q in first["questions"]], [q["id"] for q in second["questions"]]
        )
        self.assertEqual([q["id"] for q in first["questions"]], data["selected_question_ids"])

    def test_list_returns_only_own_assessments(self):
        self._start()
        services.create_assessment_session(self.other)
        response = self.client.get(reverse("assessments:list"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 1)

    def test_anonymous_requests_are_rejected(self):
        self.client.logout()
        response = self.client.post(reverse("assessments:list"))
        self.assertEqual(response.status_code, 401)

    def test_other_users_get_forbidden(self):
        data = self._start()
        self.client.force_login(self.other)
        response = self.client.get(reverse("assessments:detail", args=[data["id"]]))
        self.assertEqual(response.status_code, 403)
        response = self.client.post(reverse("assessments:complete", args=[data["id"]]))
        self.assertEqual(response.status_code, 403)

    def test_missing_assessment_returns_404(self):
        response = self.client.get(reverse("assessments:detail", args=[424242]))
        self.assertEqual(response.status_code, 404)

    def test_malformed_answer_payload(self):
        data = self._start()
        url = reverse("assessments:answers", args=[data["id"]])
        response = self._post_json(url, {"question_id": "abc", "option_id": 1})
        self.assertEqual(response.status_code, 400)
        self.assertIn("question_id", response.json()["errors"])
        response = self.client.post(url, data="{not json", content_type="application/json")
        self.assertEqual(response.status_code, 400)
        self.assertFalse(Answer.objects.exists())

    def test_out_of_range_progress_returns_400(self):
        data = self._start()
        response = self._post_json(
            reverse("assessments:progress", args=[data["id"]]),
            {"current_question_index": 500},
        )
        self.assertEqual(response.status_code, 400)
