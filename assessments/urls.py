from django.urls import path

from . import views

app_name = "assessments"

urlpatterns = [
    path("", views.AssessmentCollectionView.as_view(), name="list"),
    path("<int:assessment_id>/", views.AssessmentDetailView.as_view(), name="detail"),
    path(
        "<int:assessment_id>/progress/",
        views.AssessmentProgressView.as_view(),
        name="progress",
    ),
    path(
        "<int:assessment_id>/answers/",
        views.AnswerSubmitView.as_view(),
        name="answers",
    ),
    path(
        "<int:assessment_id>/complete/",
        views.AssessmentCompleteView.as_view(),
        name="complete",
    ),
]
