"""
Area converter URL configuration.
"""

from django.urls import path

from apps.areas.views import AreaConversionsView, AreaUnitListView, ConvertAreaView

urlpatterns = [
    path('area/units', AreaUnitListView.as_view(), name='area-units'),
    path('area/convert', ConvertAreaView.as_view(), name='area-convert'),
    path(
        'area/conversions',
        AreaConversionsView.as_view(),
        name='area-conversions',
    ),
]
