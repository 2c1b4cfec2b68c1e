import json
import logging

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from catalog.serializers import CareerSerializer, QuestionSerializer

from . import services
from .serializers import (
    AnswerInputSerializer,
    AnswerSerializer,
    AssessmentSerializer,
    ProgressInputSerializer,
)

logger = logging.getLogger(__name__)


class AssessmentApiMixin:
    """Session-authenticated JSON endpoint that maps engine errors to responses."""

    def dispatch(self, request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({"detail": "Authentication required."}, status=401)
        try:
            return super().dispatch(request, *args, **kwargs)
        except services.AssessmentError as exc:
            return JsonResponse({"detail": exc.detail}, status=exc.status_code)

    def parse_payload(self, request, serializer_class):
        """Return validated data, or a 400 response when the body is unusable."""
        try:
            payload = json.loads(request.body or "{}")
        except json.JSONDecodeError:
            return None, JsonResponse({"detail": "Invalid JSON payload"}, status=400)
        serializer = serializer_class(data=payload)
        if not serializer.is_valid():
            logger.warning("Rejected %s payload: %s", serializer_class.__name__, serializer.errors)
            return None, JsonResponse(
                {"detail": "Invalid input.", "errors": serializer.errors}, status=400
            )
        return serializer.validated_data, None


def _assessment_payload(view: services.AssessmentView) -> dict:
    data = dict(AssessmentSerializer(view.assessment).data)
    data["questions"] = QuestionSerializer(view.questions, many=True).data
    data["answers"] = AnswerSerializer(view.answers, many=True).data
    if view.assessment.is_completed:
        data["recommendations"] = CareerSerializer(view.recommendations, many=True).data
    return data


@method_decorator(csrf_exempt, name="dispatch")
class AssessmentCollectionView(AssessmentApiMixin, View):
    """List the user's assessments or start a new one."""

    def get(self, request):
        assessments = services.list_assessments(request.user)
        return JsonResponse(AssessmentSerializer(assessments, many=True).data, safe=False)

    def post(self, request):
        view = services.start_assessment(request.user)
        return JsonResponse(_assessment_payload(view), status=201)


class AssessmentDetailView(AssessmentApiMixin, View):
    def get(self, request, assessment_id):
        view = services.get_assessment_view(assessment_id, request.user)
        return JsonResponse(_assessment_payload(view))


@method_decorator(csrf_exempt, name="dispatch")
class AssessmentProgressView(AssessmentApiMixin, View):
    """Store the resume position; the client sends the absolute index."""

    def post(self, request, assessment_id):
        data, error = self.parse_payload(request, ProgressInputSerializer)
        if error:
            return error
        assessment = services.record_progress(
            assessment_id, data["current_question_index"], user=request.user
        )
        return JsonResponse(AssessmentSerializer(assessment).data)


@method_decorator(csrf_exempt, name="dispatch")
class AnswerSubmitView(AssessmentApiMixin, View):
    def post(self, request, assessment_id):
        data, error = self.parse_payload(request, AnswerInputSerializer)
        if error:
            return error
        answer = services.record_answer(
            assessment_id,
            data["question_id"],
            data["option_id"],
            user=request.user,
        )
        return JsonResponse(AnswerSerializer(answer).data)


@method_decorator(csrf_exempt, name="dispatch")
class AssessmentCompleteView(AssessmentApiMixin, View):
    """Score the assessment and return matching careers."""

    def post(self, request, assessment_id):
        outcome = services.finish_assessment(assessment_id, user=request.user)
        return JsonResponse(
            {
                "assessment": AssessmentSerializer(outcome.assessment).data,
                "recommendations": CareerSerializer(
                    outcome.recommendations, many=True
                ).data,
                "profile": outcome.profile,
            }
        )
