from django.urls import path
from . import views

urlpatterns = [
    path('stats/', views.dashboard_stats, name='dashboard-stats'),
    path('production-batch/', views.production_batch, name='dashboard-production-batch'),
]
