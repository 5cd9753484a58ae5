"""
Stockroom API views: Thin translation from HTTP to stockroom.stock.

Domain errors propagate to stockroom.api.errors.exception_handler.
"""

from rest_framework.response import Response
from rest_framework.views import APIView

from stockroom import stock
from stockroom.api.serializers import (
    MovementFilterSerializer,
    MovementSerializer,
    StockRequestSerializer,
    StockSummarySerializer,
    SummaryFilterSerializer,
)


class _StockChangeView(APIView):
    operation = None
    success_message = ''

    def post(self, request):
        serializer = StockRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        movement = self.operation(
            data['productId'],
            data['quantity'],
            user_id=request.user.pk,
            notes=data['notes'],
        )
        return Response({
            'message': self.success_message,
            'movement': MovementSerializer(movement).data,
            'balance': movement.balance_after,
        })


class ImportStockView(_StockChangeView):
    operation = staticmethod(stock.import_stock)
    success_message = 'Stock imported successfully'


class ExportStockView(_StockChangeView):
    operation = staticmethod(stock.export_stock)
    success_message = 'Stock exported successfully'


class MovementListView(APIView):
    """Filters come from the query string (GET) or the JSON body (POST)."""

    def get(self, request):
        return self._list(request.query_params)

    def post(self, request):
        return self._list(request.data)

    def _list(self, params):
        serializer = MovementFilterSerializer(data=params)
        serializer.is_valid(raise_exception=True)
        filters = serializer.validated_data

        movements = stock.movements(
            start=filters['startDate'],
            end=filters['endDate'],
            product_id=filters['productId'],
            category_id=filters['categoryId'],
        )
        return Response(MovementSerializer(movements, many=True).data)


class StockSummaryView(APIView):
    """Also served as /api/stock/current."""

    def get(self, request):
        serializer = SummaryFilterSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        rows = stock.summary(category_id=serializer.validated_data['categoryId'])
        return Response(StockSummarySerializer(rows, many=True).data)
