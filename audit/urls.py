from django.urls import path
from . import views

urlpatterns = [
    path('', views.AuditLogListView.as_view(), name='audit-log-list'),
    path('<uuid:pk>/', views.AuditLogDetailView.as_view(), name='audit-log-detail'),
]
