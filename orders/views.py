from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from users.mixins import get_profile_from_request
from users.permissions import IsAdmin
from . import services
from .models import Order
from .serializers import OrderSerializer, OrderCreateSerializer, OrderUpdateSerializer


class OrderScopedMixin:
    """Admins see every order, customers only their own"""

    def get_queryset(self):
        queryset = Order.objects.select_related('profile').prefetch_related('items__product')
        if self.request.user.is_admin:
            return queryset
        profile = get_profile_from_request(self.request)
        if profile is None:
            return queryset.none()
        return queryset.filter(profile=profile)


class OrderListCreateView(OrderScopedMixin, generics.ListCreateAPIView):
    """List orders or place a new one (guests may check out)"""
    serializer_class = OrderSerializer
    filterset_fields = ['status']

    def get_permissions(self):
        if self.request.method == 'POST':
            return [AllowAny()]
        return [IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = services.create_order(serializer.validated_data, profile=get_profile_from_request(request))
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(OrderScopedMixin, generics.RetrieveUpdateAPIView):
    """Retrieve an order; admins may update status and shipping details"""
    serializer_class = OrderSerializer
    http_method_names = ['get', 'patch', 'head', 'options']

    def get_permissions(self):
        if self.request.method == 'PATCH':
            return [IsAuthenticated(), IsAdmin()]
        return [IsAuthenticated()]

    def partial_update(self, request, *args, **kwargs):
        order = self.get_object()
        serializer = OrderUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = services.update_order(order, serializer.validated_data)
        return Response(OrderSerializer(order).data)
