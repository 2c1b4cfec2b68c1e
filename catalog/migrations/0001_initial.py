from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("text", models.TextField()),
                (
                    "section",
                    models.CharField(
                        choices=[
                            ("INTEREST", "Interest"),
                            ("APTITUDE", "Aptitude"),
                            ("PERSONALITY", "Personality"),
                        ],
                        max_length=16,
                    ),
                ),
                (
                    "riasec_code",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("R", "Realistic"),
                            ("I", "Investigative"),
                            ("A", "Artistic"),
                            ("S", "Social"),
                            ("E", "Enterprising"),
                            ("C", "Conventional"),
                        ],
                        help_text="Interest questions only.",
                        max_length=1,
                    ),
                ),
                (
                    "subcategory",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("LOGICAL", "Logical reasoning"),
                            ("NUMERICAL", "Numerical ability"),
                            ("VERBAL", "Verbal ability"),
                            ("LEADERSHIP", "Leadership"),
                            ("TEAMWORK", "Teamwork"),
                            ("DISCIPLINE", "Discipline"),
                        ],
                        help_text="Aptitude and personality questions only.",
                        max_length=16,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("display_order", models.PositiveIntegerField(default=0)),
            ],
            options={"ordering": ("display_order", "id")},
        ),
        migrations.CreateModel(
            name="Option",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("text", models.CharField(max_length=255)),
                (
                    "weight",
                    models.IntegerField(
                        help_text="Contribution to the category score when this option is chosen."
                    ),
                ),
                ("display_order", models.PositiveIntegerField(default=1)),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="options",
                        to="catalog.question",
                    ),
                ),
            ],
            options={"ordering": ("question", "display_order", "id")},
        ),
        migrations.CreateModel(
            name="Career",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=160)),
                ("description", models.TextField()),
                ("stream", models.CharField(max_length=60)),
                (
                    "required_codes",
                    models.JSONField(blank=True, default=list, help_text='RIASEC codes such as ["I", "R"].'),
                ),
                ("typical_degree", models.CharField(blank=True, max_length=160)),
            ],
            options={"ordering": ("id",)},
        ),
        migrations.CreateModel(
            name="EngineeringBranch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(unique=True)),
                ("name", models.CharField(max_length=160)),
                ("description", models.TextField(blank=True)),
                ("broad_work_area", models.CharField(blank=True, max_length=120)),
            ],
            options={"ordering": ("name",), "verbose_name_plural": "engineering branches"},
        ),
        migrations.CreateModel(
            name="Programme",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "stream",
                    models.CharField(
                        choices=[
                            ("ARTS", "Arts"),
                            ("SCIENCE", "Science"),
                            ("COMMERCE", "Commerce"),
                            ("ENGINEERING", "Engineering"),
                            ("MANAGEMENT", "Management"),
                            ("SOCIAL_WORK", "Social work"),
                        ],
                        max_length=20,
                    ),
                ),
                ("degree_level", models.CharField(default="Undergraduate", max_length=40)),
                ("degree_type", models.CharField(max_length=40)),
                ("full_name", models.CharField(max_length=200)),
                ("duration_years", models.PositiveSmallIntegerField(default=4)),
                ("short_description", models.TextField(blank=True)),
                ("eligibility_12th_stream", models.CharField(blank=True, max_length=120)),
                ("key_tags", models.JSONField(blank=True, default=list)),
                ("ai_recommended", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "branch",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="programmes",
                        to="catalog.engineeringbranch",
                    ),
                ),
            ],
            options={"ordering": ("stream", "full_name")},
        ),
    ]
