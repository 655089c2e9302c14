from django.urls import path
from . import views

urlpatterns = [
    path('departments/', views.DepartmentListView.as_view(), name='department-list'),
    path('municipalities/<uuid:department_id>/', views.MunicipalityListView.as_view(), name='municipality-list'),
]
