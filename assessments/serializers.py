from rest_framework import serializers

from .models import Answer, Assessment


class ProgressInputSerializer(serializers.Serializer):
    current_question_index = serializers.IntegerField()


class AnswerInputSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    option_id = serializers.IntegerField()


class AssessmentSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Assessment
        fields = [
            "id",
            "user_id",
            "status",
            "started_at",
            "completed_at",
            "selected_question_ids",
            "current_question_index",
            "scores",
        ]


class AnswerSerializer(serializers.ModelSerializer):
    assessment_id = serializers.IntegerField(read_only=True)
    question_id = serializers.IntegerField(read_only=True)
    option_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Answer
        fields = ["id", "assessment_id", "question_id", "option_id", "answered_at"]
