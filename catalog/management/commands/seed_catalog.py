from __future__ import annotations

from django.core.management.base import BaseCommand
from django.db import transaction

from catalog.models import Career, EngineeringBranch, Option, Programme, Question

LIKERT_OPTIONS = [
    {"text": "Strongly Disagree", "weight": 1},
    {"text": "Disagree", "weight": 2},
    {"text": "Neutral", "weight": 3},
    {"text": "Agree", "weight": 4},
    {"text": "Strongly Agree", "weight": 5},
]

INTEREST_QUESTIONS = {
    "R": [
        "I like working with my hands and fixing things.",
        "I would enjoy operating heavy machinery.",
        "I like outdoor work like gardening or construction.",
        "I enjoy assembling furniture, models or electronic kits.",
        "I would like a job where I build or repair physical things.",
    ],
    "I": [
        "I enjoy solving complex math and science problems.",
        "I like conducting experiments in a lab.",
        "I enjoy researching and discovering new facts.",
        "I like figuring out how and why things work.",
        "I enjoy reading about scientific discoveries.",
    ],
    "A": [
        "I love creative writing, poetry, or blogging.",
        "I enjoy performing on stage or playing music.",
        "I like designing layouts, logos, or interiors.",
        "I enjoy sketching, painting or photography.",
        "I like expressing ideas in original ways.",
    ],
    "S": [
        "I feel fulfilled when helping others with personal problems.",
        "I enjoy teaching or explaining things to people.",
        "I like volunteering for community service.",
        "I am good at listening when friends need support.",
        "I would enjoy working in a hospital, school or NGO.",
    ],
    "E": [
        "I like to start my own business or projects.",
        "I enjoy persuading or leading people.",
        "I am comfortable taking risks to achieve goals.",
        "I like selling ideas or products to others.",
        "I enjoy organising events and taking charge.",
    ],
    "C": [
        "I like following clear rules and procedures.",
        "I enjoy managing data, records, or budgets.",
        "I like keeping things orderly and systematic.",
        "I enjoy checking work carefully for mistakes.",
        "I like working with spreadsheets and schedules.",
    ],
}

SUBCATEGORY_QUESTIONS = {
    (Question.SECTION_APTITUDE, Question.SUBCATEGORY_LOGICAL): [
        "I can quickly spot patterns in a sequence of shapes or numbers.",
        "I enjoy puzzles that need step-by-step reasoning.",
        "I can tell when an argument does not follow logically.",
        "I break big problems into smaller parts before solving them.",
    ],
    (Question.SECTION_APTITUDE, Question.SUBCATEGORY_NUMERICAL): [
        "I can do mental calculations quickly and accurately.",
        "I am comfortable interpreting graphs and tables.",
        "I find percentages and ratios easy to work with.",
        "I enjoy estimating quantities and costs.",
    ],
    (Question.SECTION_APTITUDE, Question.SUBCATEGORY_VERBAL): [
        "I can explain complex ideas clearly in writing.",
        "I understand the meaning of unfamiliar words from context.",
        "I enjoy summarising long passages in a few sentences.",
    ],
    (Question.SECTION_PERSONALITY, Question.SUBCATEGORY_LEADERSHIP): [
        "People often look to me to make decisions in a group.",
        "I am comfortable taking responsibility when things go wrong.",
        "I like motivating others to reach a shared goal.",
        "I volunteer to lead class or team projects.",
    ],
    (Question.SECTION_PERSONALITY, Question.SUBCATEGORY_TEAMWORK): [
        "I prefer working in a team over working alone.",
        "I respect ideas that differ from my own.",
        "I share credit with others when a project succeeds.",
        "I help teammates who are falling behind.",
    ],
    (Question.SECTION_PERSONALITY, Question.SUBCATEGORY_DISCIPLINE): [
        "I finish my assignments before the deadline.",
        "I stick to a study routine even without supervision.",
        "I keep my commitments even when they become inconvenient.",
    ],
}

ENGINEERING_BRANCHES = [
    {"slug": "civil", "name": "CIVIL ENGINEERING", "description": "Design and maintenance of infrastructure like bridges and roads.", "broad_work_area": "Core Engineering"},
    {"slug": "mechanical", "name": "MECHANICAL ENGINEERING", "description": "Design and manufacturing of machinery and mechanical systems.", "broad_work_area": "Core Engineering"},
    {"slug": "cse", "name": "COMPUTER SCIENCE & ENGINEERING", "description": "Study of computation, software systems, and network security.", "broad_work_area": "IT & Software"},
    {"slug": "it", "name": "INFORMATION TECHNOLOGY", "description": "Management and processing of information using computers.", "broad_work_area": "IT & Software"},
    {"slug": "ece", "name": "ELECTRONICS & COMMUNICATION", "description": "Design of electronic circuits and wireless communication systems.", "broad_work_area": "IT & Software"},
    {"slug": "eee", "name": "ELECTRICAL & ELECTRONICS", "description": "Study of power systems, electrical machinery, and renewable energy.", "broad_work_area": "Core Engineering"},
    {"slug": "chemical", "name": "CHEMICAL & MATERIALS", "description": "Process engineering, petrochemicals, and materials science.", "broad_work_area": "Core Engineering"},
    {"slug": "biotech", "name": "BIOTECH & LIFE SCIENCES", "description": "Application of biological systems in industry and medicine.", "broad_work_area": "Emerging Tech"},
    {"slug": "emerging", "name": "INTERDISCIPLINARY & EMERGING", "description": "Cross-disciplinary tech like Robotics, Mechatronics, and AI.", "broad_work_area": "Emerging Tech"},
]

PROGRAMMES = [
    {"branch": "civil", "stream": "ENGINEERING", "degree_type": "B.E.", "full_name": "B.E. Civil Engineering", "short_description": "Fundamentals of construction, structural design, and urban planning.", "eligibility_12th_stream": "Science with Mathematics", "key_tags": ["Construction", "Infrastructure"]},
    {"branch": "civil", "stream": "ENGINEERING", "degree_type": "B.E.", "full_name": "B.E. Environmental Engineering", "short_description": "Focus on sustainability, waste management, and pollution control.", "eligibility_12th_stream": "Science with Mathematics", "key_tags": ["Sustainability", "Environment"]},
    {"branch": "mechanical", "stream": "ENGINEERING", "degree_type": "B.E.", "full_name": "B.E. Mechanical Engineering", "short_description": "Core study of thermodynamics, mechanics, and machine design.", "eligibility_12th_stream": "Science with Mathematics", "key_tags": ["Machines", "Design"]},
    {"branch": "mechanical", "stream": "ENGINEERING", "degree_type": "B.E.", "full_name": "B.E. Automobile Engineering", "short_description": "Design and manufacturing of vehicles and propulsion systems.", "eligibility_12th_stream": "Science with Mathematics", "key_tags": ["Automotive", "Transport"]},
    {"branch": "cse", "stream": "ENGINEERING", "degree_type": "B.E.", "full_name": "B.E. Computer Science and Engineering", "short_description": "Comprehensive study of algorithms, data structures, and software engineering.", "eligibility_12th_stream": "Science with Mathematics", "key_tags": ["Software", "Computing"]},
    {"branch": "cse", "stream": "ENGINEERING", "degree_type": "B.Tech", "full_name": "B.Tech Artificial Intelligence and Data Science", "short_description": "Focus on machine learning, big data, and cognitive computing.", "eligibility_12th_stream": "Science with Mathematics", "key_tags": ["AI", "Data Science"]},
    {"branch": "it", "stream": "ENGINEERING", "degree_type": "B.Tech", "full_name": "B.Tech Information Technology", "short_description": "Managing software applications and information infrastructure.", "eligibility_12th_stream": "Science with Mathematics", "key_tags": ["IT", "Services"]},
    {"branch": "ece", "stream": "ENGINEERING", "degree_type": "B.E.", "full_name": "B.E. Electronics and Communication Engineering", "short_description": "Design of communication protocols and electronic hardware.", "eligibility_12th_stream": "Science with Mathematics", "key_tags": ["Wireless", "Electronics"]},
    {"stream": "SCIENCE", "degree_type": "B.Sc.", "full_name": "B.Sc. Mathematics", "short_description": "Deep dive into pure and applied mathematical theories.", "eligibility_12th_stream": "Science with Mathematics", "key_tags": ["Math", "Research"]},
    {"stream": "SCIENCE", "degree_type": "B.Sc.", "full_name": "B.Sc. Psychology", "short_description": "Scientific study of human behavior and mental processes.", "eligibility_12th_stream": "Any stream", "key_tags": ["Behavior", "Science"]},
    {"stream": "ARTS", "degree_type": "B.A.", "full_name": "B.A. Economics", "short_description": "Study of resource allocation and financial systems.", "eligibility_12th_stream": "Any stream", "key_tags": ["Finance", "Policy"]},
    {"stream": "ARTS", "degree_type": "B.A.", "full_name": "B.A. Journalism & Mass Communication", "short_description": "Media studies, reporting, and digital storytelling.", "eligibility_12th_stream": "Any stream", "key_tags": ["Media", "Communication"]},
    {"stream": "COMMERCE", "degree_type": "B.Com.", "full_name": "B.Com. General", "short_description": "Core principles of accounting, trade, and business law.", "eligibility_12th_stream": "Commerce", "key_tags": ["Business", "Accounting"]},
    {"stream": "MANAGEMENT", "degree_type": "B.B.A.", "full_name": "B.B.A. General", "short_description": "Fundamentals of business administration and leadership.", "eligibility_12th_stream": "Any stream", "key_tags": ["Management", "Leadership"]},
    {"stream": "SOCIAL_WORK", "degree_type": "B.S.W.", "full_name": "B.S.W. Social Work", "short_description": "Professional training for community service and social welfare.", "eligibility_12th_stream": "Any stream", "key_tags": ["Social", "Community"]},
]

CAREERS = [
    {"title": "Software Engineer", "description": "Builds apps and systems using code.", "stream": "Science", "required_codes": ["I", "R"], "typical_degree": "B.Tech/BE in CS/IT"},
    {"title": "Civil Engineer", "description": "Designs and maintains infrastructure like bridges and roads.", "stream": "Science", "required_codes": ["R", "I"], "typical_degree": "B.Tech in Civil"},
    {"title": "Data Scientist", "description": "Uses statistics and AI to extract insights from data.", "stream": "Science", "required_codes": ["I", "C"], "typical_degree": "B.Sc/B.Tech (Stats/DS)"},
    {"title": "Chartered Accountant", "description": "Manages financial accounts and audits.", "stream": "Commerce", "required_codes": ["C", "E"], "typical_degree": "B.Com + CA"},
    {"title": "Psychologist", "description": "Studies human behavior and mental processes.", "stream": "Arts", "required_codes": ["S", "I"], "typical_degree": "BA/MA Psychology"},
    {"title": "Graphic Designer", "description": "Creates visual concepts for brands and media.", "stream": "Arts", "required_codes": ["A", "E"], "typical_degree": "B.Des / BFA"},
    {"title": "Teacher", "description": "Educates and mentors students in schools and colleges.", "stream": "Arts", "required_codes": ["S", "A"], "typical_degree": "B.A./B.Sc + B.Ed"},
    {"title": "Entrepreneur", "description": "Starts and grows new business ventures.", "stream": "Commerce", "required_codes": ["E", "R"], "typical_degree": "B.B.A. / any degree"},
]


class Command(BaseCommand):
    help = "Seed the question bank, engineering branches, programmes and careers."

    def add_arguments(self, parser):
        parser.add_argument(
            "--skip-questions",
            action="store_true",
            help="Only seed careers, branches and programmes.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if not options["skip_questions"]:
            created = self._seed_questions()
            self.stdout.write(self.style.SUCCESS(f"Seeded {created} questions."))

        branch_map = {}
        for payload in ENGINEERING_BRANCHES:
            branch, _ = EngineeringBranch.objects.update_or_create(
                slug=payload["slug"],
                defaults={k: v for k, v in payload.items() if k != "slug"},
            )
            branch_map[branch.slug] = branch
        self.stdout.write(f" - {len(branch_map)} engineering branches ready")

        for payload in PROGRAMMES:
            defaults = {k: v for k, v in payload.items() if k not in {"full_name", "branch"}}
            defaults["branch"] = branch_map.get(payload.get("branch"))
            Programme.objects.update_or_create(
                full_name=payload["full_name"], defaults=defaults
            )
        self.stdout.write(f" - {len(PROGRAMMES)} programmes ready")

        for payload in CAREERS:
            Career.objects.update_or_create(
                title=payload["title"],
                defaults={k: v for k, v in payload.items() if k != "title"},
            )
        self.stdout.write(f" - {len(CAREERS)} careers ready")
        self.stdout.write(self.style.SUCCESS("Seeding completed."))

    def _seed_questions(self) -> int:
        entries = [
            (Question.SECTION_INTEREST, code, "", text)
            for code, texts in INTEREST_QUESTIONS.items()
            for text in texts
        ]
        entries.extend(
            (section, "", subcategory, text)
            for (section, subcategory), texts in SUBCATEGORY_QUESTIONS.items()
            for text in texts
        )
        created = 0
        for order, (section, riasec_code, subcategory, text) in enumerate(entries, start=1):
            question, was_created = Question.objects.get_or_create(
                text=text,
                defaults={
                    "section": section,
                    "riasec_code": riasec_code,
                    "subcategory": subcategory,
                    "display_order": order,
                },
            )
            if not was_created:
                continue
            created += 1
            Option.objects.bulk_create(
                Option(question=question, display_order=index, **option)
                for index, option in enumerate(LIKERT_OPTIONS, start=1)
            )
        return created
