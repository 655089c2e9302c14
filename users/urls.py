from django.urls import path
from . import views

urlpatterns = [
    path('me/', views.ProfileMeView.as_view(), name='profile-me'),
    path('', views.ProfileListView.as_view(), name='profile-list'),
    path('<uuid:pk>/', views.ProfileDetailView.as_view(), name='profile-detail'),
]
