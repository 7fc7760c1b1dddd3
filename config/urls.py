"""
URL configuration for Pro Housing.
"""

from django.urls import include, path

from apps.core.views import health_check

urlpatterns = [
    path('health/', health_check, name='health-check'),
    path('api/', include('apps.loans.urls')),
    path('api/', include('apps.areas.urls')),
    path('api/', include('apps.pricing.urls')),
]
