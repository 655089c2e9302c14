from django.db.models import Count
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated

from .models import Profile
from .mixins import require_profile_for_request
from .permissions import IsAdmin
from .serializers import ProfileSerializer, ProfileListSerializer, ProfileDetailSerializer


class ProfileMeView(generics.RetrieveUpdateAPIView):
    """Retrieve or update the caller's own profile"""
    serializer_class = ProfileSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ['get', 'patch', 'head', 'options']

    def get_object(self):
        return require_profile_for_request(self.request)


class ProfileListView(generics.ListAPIView):
    """List profiles (admin only)"""
    queryset = Profile.objects.select_related('user').annotate(orders_count=Count('orders'))
    serializer_class = ProfileListSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def get_queryset(self):
        queryset = super().get_queryset()

        # Filter by role
        role = self.request.query_params.get('role', None)
        if role:
            queryset = queryset.filter(role=role.upper())

        # Filter by location
        department = self.request.query_params.get('department', None)
        if department:
            queryset = queryset.filter(department=department)

        municipality = self.request.query_params.get('municipality', None)
        if municipality:
            queryset = queryset.filter(municipality=municipality)

        return queryset.order_by('-created_at')


class ProfileDetailView(generics.RetrieveAPIView):
    """Retrieve a profile with its orders (admin only)"""
    queryset = Profile.objects.select_related('user').prefetch_related('orders__items')
    serializer_class = ProfileDetailSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
