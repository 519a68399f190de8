"""
URL configuration for the VaxBook project.

The `urlpatterns` list routes URLs to views.  Site routes come from the
booking app; the Django admin lives under ``/django-admin/`` because
``/admin/...`` belongs to the hospital and site administration pages.
OpenAPI documentation for the JSON endpoints is exposed at
``/swagger/`` and ``/redoc/``.
"""
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="VaxBook API",
    default_version='v1',
    description="Administrative JSON endpoints of the vaccine appointment service.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('', include('booking.routers')),
    # Swagger and ReDoc
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
