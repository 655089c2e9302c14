from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from users.permissions import IsAdmin, IsAdminOrReadOnly
from . import services
from .models import Collection
from .serializers import CollectionSerializer, ProductSerializer, ProductWriteSerializer


class ProductCreateView(generics.GenericAPIView):
    """Create a product with its variants and images (admin only)"""
    serializer_class = ProductWriteSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = services.create_product(serializer.validated_data)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ProductListView(generics.GenericAPIView):
    """List active products, optionally filtered by collection"""
    serializer_class = ProductSerializer
    permission_classes = [AllowAny]

    def get(self, request):
        collection_id = request.query_params.get('collection', None)
        return Response(services.list_products(collection_id))


class ProductBySlugView(generics.GenericAPIView):
    serializer_class = ProductSerializer
    permission_classes = [AllowAny]

    def get(self, request, slug):
        return Response(ProductSerializer(services.get_product_by_slug(slug)).data)


class ProductDetailView(generics.GenericAPIView):
    """Retrieve a product; admins may patch or remove it"""
    serializer_class = ProductSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get(self, request, pk):
        return Response(ProductSerializer(services.get_product(pk)).data)

    def patch(self, request, pk):
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        product = services.update_product(pk, serializer.validated_data)
        return Response(ProductSerializer(product).data)

    def delete(self, request, pk):
        services.remove_product(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CollectionListView(generics.ListAPIView):
    """List active collections"""
    queryset = Collection.objects.filter(is_active=True).order_by('name')
    serializer_class = CollectionSerializer
    permission_classes = [AllowAny]
