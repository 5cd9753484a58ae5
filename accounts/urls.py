from django.urls import path

from accounts import api

urlpatterns = [
    path('register', api.RegisterView.as_view(), name='auth-register'),
    path('login', api.LoginView.as_view(), name='auth-login'),
    path('logout', api.LogoutView.as_view(), name='auth-logout'),
]
