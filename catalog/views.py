from django.http import JsonResponse
from django.views import View

from .models import Career, EngineeringBranch, Programme, Question
from .serializers import (
    CareerSerializer,
    EngineeringBranchSerializer,
    ProgrammeSerializer,
    QuestionSerializer,
)


class QuestionListView(View):
    """Return the active question bank with options in display order."""

    def get(self, request):
        questions = Question.objects.active().prefetch_related("options")
        return JsonResponse(QuestionSerializer(questions, many=True).data, safe=False)


class CareerListView(View):
    def get(self, request):
        return JsonResponse(
            CareerSerializer(Career.objects.all(), many=True).data, safe=False
        )


class ProgrammeListView(View):
    """Active degree programmes with their engineering branch, if any."""

    def get(self, request):
        programmes = Programme.objects.active().select_related("branch")
        stream = request.GET.get("stream")
        if stream:
            programmes = programmes.filter(stream=stream.upper())
        return JsonResponse(ProgrammeSerializer(programmes, many=True).data, safe=False)


class EngineeringBranchListView(View):
    def get(self, request):
        return JsonResponse(
            EngineeringBranchSerializer(EngineeringBranch.objects.all(), many=True).data,
            safe=False,
        )
