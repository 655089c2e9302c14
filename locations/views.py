from rest_framework import generics
from rest_framework.permissions import AllowAny

from .models import Department, Municipality
from .serializers import DepartmentSerializer, MunicipalitySerializer


def list_departments():
    return Department.objects.order_by('name')


def list_municipalities(department_id):
    return Municipality.objects.filter(department_id=department_id).order_by('name')


class DepartmentListView(generics.ListAPIView):
    """List every department ordered by name"""
    serializer_class = DepartmentSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        return list_departments()


class MunicipalityListView(generics.ListAPIView):
    """List the municipalities of one department ordered by name"""
    serializer_class = MunicipalitySerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        return list_municipalities(self.kwargs['department_id'])
