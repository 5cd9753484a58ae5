from django.urls import path

from stockroom.api import views

urlpatterns = [
    path('import', views.ImportStockView.as_view(), name='stock-import'),
    path('export', views.ExportStockView.as_view(), name='stock-export'),
    path('movements', views.MovementListView.as_view(), name='stock-movements'),
    path('summary', views.StockSummaryView.as_view(), name='stock-summary'),
    path('current', views.StockSummaryView.as_view(), name='stock-current'),
]
