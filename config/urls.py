"""
URL configuration for the career assessment project.

JSON endpoints live under /api/, authentication under /accounts/ and
catalogue maintenance in the Django admin.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('accounts/', include('allauth.urls')),
    path('api/assessments/', include('assessments.urls')),
    path('api/', include('catalog.urls')),
]
