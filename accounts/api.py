"""
Accounts API views: Register, login, logout.

These endpoints are public; everything else requires a bearer token.
"""

from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.authenticator import Authenticator
from accounts.serializers import LoginSerializer, RegisterSerializer, UserSerializer


class PublicAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]


class RegisterView(PublicAPIView):

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        Authenticator.register(**serializer.validated_data)
        return Response({'message': 'Registration successful'})


class LoginView(PublicAPIView):

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, token = Authenticator.login(**serializer.validated_data)
        return Response({
            'message': 'Login successful',
            'user': UserSerializer(user).data,
            'token': token,
        })


class LogoutView(PublicAPIView):
    """Tokens are stateless; the client discards its copy."""

    def post(self, request):
        return Response({'message': 'Logout successful'})
