from django.urls import path

from . import views

app_name = "catalog"

urlpatterns = [
    path("questions/", views.QuestionListView.as_view(), name="question-list"),
    path("careers/", views.CareerListView.as_view(), name="career-list"),
    path("programmes/", views.ProgrammeListView.as_view(), name="programme-list"),
    path(
        "engineering-branches/",
        views.EngineeringBranchListView.as_view(),
        name="branch-list",
    ),
]
