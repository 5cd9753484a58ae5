from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('accounts.urls')),
    path('api/stock/', include('stockroom.api.urls')),
    path('api/', include('catalog.urls')),
]
