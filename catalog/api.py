"""
Catalog API views: Products and categories.

All writes go through stockroom.catalog so stock provisioning and deletion
policies apply. CatalogError propagates to the API exception handler.
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.serializers import (
    CategoryInputSerializer,
    CategorySerializer,
    ProductInputSerializer,
    ProductSerializer,
)
from stockroom import catalog


class CategoryListView(APIView):

    def get(self, request):
        return Response(CategorySerializer(catalog.list_categories(), many=True).data)

    def post(self, request):
        serializer = CategoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = catalog.create_category(
            serializer.validated_data.get('name', ''),
            serializer.validated_data.get('description', ''),
        )
        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)


class CategoryDetailView(APIView):

    def get(self, request, pk):
        return Response(CategorySerializer(catalog.get_category(pk)).data)

    def put(self, request, pk):
        serializer = CategoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = catalog.update_category(pk, **serializer.validated_data)
        return Response(CategorySerializer(category).data)

    def delete(self, request, pk):
        catalog.delete_category(pk)
        return Response({'message': 'Category deleted successfully'})


class ProductListView(APIView):

    def get(self, request):
        return Response(ProductSerializer(catalog.list_products(), many=True).data)

    def post(self, request):
        serializer = ProductInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        kwargs = serializer.to_service_kwargs()
        product = catalog.create_product(
            kwargs.pop('name', ''),
            kwargs.pop('sku', ''),
            **kwargs,
        )
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ProductDetailView(APIView):

    def get(self, request, pk):
        return Response(ProductSerializer(catalog.get_product(pk)).data)

    def put(self, request, pk):
        serializer = ProductInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = catalog.update_product(pk, **serializer.to_service_kwargs())
        return Response(ProductSerializer(product).data)

    def delete(self, request, pk):
        catalog.delete_product(pk)
        return Response({'message': 'Product deleted successfully'})
