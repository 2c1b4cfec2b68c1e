import random
from io import StringIO

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse

from assessments.selection import select_assessment_questions
from .models import Career, EngineeringBranch, Option, Programme, Question


class QuestionCategoryTests(TestCase):
    def test_interest_question_uses_riasec_code(self):
        question = Question(text="Fix things", section=Question.SECTION_INTEREST, riasec_code="R")
        question.full_clean()
        self.assertEqual(question.category_code, "R")

    def test_interest_question_requires_code(self):
        question = Question(text="Fix things", section=Question.SECTION_INTEREST)
        with self.assertRaises(ValidationError):
            question.full_clean()

    def test_subcategory_must_match_section(self):
        question = Question(
            text="Lead a team",
            section=Question.SECTION_APTITUDE,
            subcategory=Question.SUBCATEGORY_LEADERSHIP,
        )
        with self.assertRaises(ValidationError):
            question.full_clean()

    def test_only_one_category_field(self):
        question = Question(
            text="Numbers",
            section=Question.SECTION_APTITUDE,
            riasec_code="I",
            subcategory=Question.SUBCATEGORY_NUMERICAL,
        )
        with self.assertRaises(ValidationError):
            question.full_clean()

    def test_personality_question_uses_subcategory(self):
        question = Question(
            text="Deadlines",
            section=Question.SECTION_PERSONALITY,
            subcategory=Question.SUBCATEGORY_DISCIPLINE,
        )
        question.full_clean()
        self.assertEqual(question.category_code, "DISCIPLINE")


class SeedCatalogCommandTests(TestCase):
    def test_seed_supports_a_full_assessment(self):
        call_command("seed_catalog", stdout=StringIO())

        self.assertTrue(Question.objects.exists())
        self.assertFalse(
            Question.objects.filter(options__isnull=True).exists()
        )
        self.assertEqual(
            set(Option.objects.values_list("weight", flat=True)), {1, 2, 3, 4, 5}
        )
        self.assertEqual(len(select_assessment_questions(rng=random.Random(0))), 40)

    def test_seed_is_idempotent(self):
        call_command("seed_catalog", stdout=StringIO())
        counts = (Question.objects.count(), Option.objects.count(), Career.objects.count())
        call_command("seed_catalog", stdout=StringIO())
        self.assertEqual(
            counts,
            (Question.objects.count(), Option.objects.count(), Career.objects.count()),
        )

    def test_programmes_link_to_branches(self):
        call_command("seed_catalog", "--skip-questions", stdout=StringIO())
        self.assertFalse(Question.objects.exists())
        programme = Programme.objects.get(full_name="B.E. Civil Engineering")
        self.assertEqual(programme.branch.slug, "civil")
        self.assertIsNone(Programme.objects.get(full_name="B.A. Economics").branch)


class CatalogueApiTests(TestCase):
    def setUp(self):
        self.question = Question.objects.create(
            text="I enjoy experiments.", section=Question.SECTION_INTEREST, riasec_code="I"
        )
        Option.objects.create(question=self.question, text="Agree", weight=4, display_order=2)
        Option.objects.create(question=self.question, text="Disagree", weight=2, display_order=1)
        Question.objects.create(
            text="Retired", section=Question.SECTION_INTEREST, riasec_code="R", is_active=False
        )
        branch = EngineeringBranch.objects.create(slug="cse", name="Computer Science")
        Programme.objects.create(
            branch=branch, stream="ENGINEERING", degree_type="B.E.", full_name="B.E. CSE"
        )
        Programme.objects.create(stream="ARTS", degree_type="B.A.", full_name="B.A. English")
        Programme.objects.create(
            stream="ARTS", degree_type="B.A.", full_name="B.A. Closed", is_active=False
        )
        Career.objects.create(
            title="Researcher", description="Runs studies.", stream="Science", required_codes=["I"]
        )

    def test_questions_lists_active_with_ordered_options(self):
        response = self.client.get(reverse("catalog:question-list"))
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual([q["id"] for q in payload], [self.question.id])
        self.assertEqual([o["text"] for o in payload[0]["options"]], ["Disagree", "Agree"])

    def test_programmes_filter_by_stream(self):
        response = self.client.get(reverse("catalog:programme-list"), {"stream": "arts"})
        self.assertEqual([p["full_name"] for p in response.json()], ["B.A. English"])
        response = self.client.get(reverse("catalog:programme-list"))
        engineering = [p for p in response.json() if p["stream"] == "ENGINEERING"][0]
        self.assertEqual(engineering["branch"]["slug"], "cse")

    def test_careers_and_branches(self):
        careers = self.client.get(reverse("catalog:career-list")).json()
        self.assertEqual(careers[0]["required_codes"], ["I"])
        branches = self.client.get(reverse("catalog:branch-list")).json()
        self.assertEqual(branches[0]["slug"], "cse")
