from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from main.storage import ObjectStorage
from users.permissions import IsAdmin
from . import services
from .serializers import B2BQuoteSerializer, B2BQuoteCreateSerializer


class QuoteCreateView(generics.GenericAPIView):
    """Public quote intake, JSON or multipart with an optional logo"""
    serializer_class = B2BQuoteCreateSerializer
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        logo = serializer.validated_data.get('logo')

        with ObjectStorage() as storage:
            quote, whatsapp = services.create_quote(serializer.validated_data, logo=logo, storage=storage)

        return Response(
            {'quote': B2BQuoteSerializer(quote).data, 'whatsapp_payload': whatsapp},
            status=status.HTTP_201_CREATED
        )


class QuoteListView(generics.ListAPIView):
    serializer_class = B2BQuoteSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def get_queryset(self):
        return services.list_quotes()


class QuoteApproveView(generics.GenericAPIView):
    """Mark a quote's design as approved (admin only)"""
    serializer_class = B2BQuoteSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def patch(self, request, pk):
        return Response(B2BQuoteSerializer(services.approve_quote(pk)).data)
