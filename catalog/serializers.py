from rest_framework import serializers

from .models import Career, EngineeringBranch, Option, Programme, Question


class OptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Option
        fields = ["id", "text", "weight", "display_order"]


class QuestionSerializer(serializers.ModelSerializer):
    options = OptionSerializer(many=True, read_only=True)

    class Meta:
        model = Question
        fields = [
            "id",
            "text",
            "section",
            "riasec_code",
            "subcategory",
            "display_order",
            "options",
        ]


class CareerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Career
        fields = [
            "id",
            "title",
            "description",
            "stream",
            "required_codes",
            "typical_degree",
        ]


class EngineeringBranchSerializer(serializers.ModelSerializer):
    class Meta:
        model = EngineeringBranch
        fields = ["id", "slug", "name", "description", "broad_work_area"]


class ProgrammeSerializer(serializers.ModelSerializer):
    branch = EngineeringBranchSerializer(read_only=True)

    class Meta:
        model = Programme
        fields = [
            "id",
            "branch",
            "stream",
            "degree_level",
            "degree_type",
            "full_name",
            "duration_years",
            "short_description",
            "eligibility_12th_stream",
            "key_tags",
            "ai_recommended",
        ]
