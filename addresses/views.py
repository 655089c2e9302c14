from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.mixins import ProfileScopedMixin
from . import services
from .serializers import AddressSerializer, AddressWriteSerializer


class AddressListCreateView(ProfileScopedMixin, generics.ListCreateAPIView):
    """List the caller's addresses (default first) or add a new one"""
    serializer_class = AddressSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return services.list_addresses(self.profile)

    def create(self, request, *args, **kwargs):
        profile = self.profile
        serializer = AddressWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        address = services.create_address(profile, serializer.validated_data)
        return Response(AddressSerializer(address).data, status=status.HTTP_201_CREATED)


class AddressDetailView(ProfileScopedMixin, generics.GenericAPIView):
    """Retrieve, patch or delete one of the caller's addresses"""
    serializer_class = AddressSerializer
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        address = services.get_address(pk, self.profile)
        return Response(AddressSerializer(address).data)

    def patch(self, request, pk):
        current = services.get_address(pk, self.profile)
        serializer = AddressWriteSerializer(current, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        address = services.update_address(pk, self.profile, serializer.validated_data)
        return Response(AddressSerializer(address).data)

    def delete(self, request, pk):
        services.delete_address(pk, self.profile)
        return Response(status=status.HTTP_204_NO_CONTENT)
