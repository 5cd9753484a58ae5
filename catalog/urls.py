from django.urls import path

from catalog import api

urlpatterns = [
    path('products', api.ProductListView.as_view(), name='product-list'),
    path('products/<int:pk>', api.ProductDetailView.as_view(), name='product-detail'),
    path('categories', api.CategoryListView.as_view(), name='category-list'),
    path('categories/<int:pk>', api.CategoryDetailView.as_view(), name='category-detail'),
]
