"""Users app API views.

Endpoints include:
- me: returns the current authenticated user.
- profile: updates the display name.
- signin / refresh / signout: JWT session handling. Signing out also drops
  the caller's cart.
- admin users: administrator update and delete.
"""

from dataclasses import replace

from cart.services import merge_session_cart
from common.identity import identity_from_request
from common.results import result_status
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .logging import log_auth_event
from .serializers import (
    AdminUserUpdateSerializer,
    EmailTokenObtainPairSerializer,
    SignOutSerializer,
    UpdateProfileSerializer,
    UserMeSerializer,
)
from .services import delete_user, sign_out, update_profile, update_user


class CurrentUserView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "profile"

    @extend_schema(
        tags=["User Endpoints"],
        summary="Get current user",
        responses={200: UserMeSerializer, 401: OpenApiResponse(description="Unauthorized")},
    )
    def get(self, request):
        return Response(UserMeSerializer(request.user).data)


class ProfileUpdateView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "profile"

    @extend_schema(tags=["User Endpoints"], summary="Update display name", request=UpdateProfileSerializer)
    def patch(self, request):
        serializer = UpdateProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = update_profile(user_id=request.user.id, **serializer.validated_data)
        return Response(result.as_dict(), status=result_status(result))


class SignInView(TokenObtainPairView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signin"
    serializer_class = EmailTokenObtainPairSerializer

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            log_auth_event("signin", request, status="failed")
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        # An anonymous cart started before sign-in follows the user
        merge_session_cart(replace(identity_from_request(request), user_id=serializer.user.id))
        log_auth_event("signin", request, user=serializer.user)
        return Response(serializer.validated_data, status=status.HTTP_200_OK)


class RefreshView(TokenRefreshView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "token_refresh"

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        status_label = "success" if resp.status_code == 200 else "failed"
        log_auth_event("token_refresh", request, status=status_label)
        return resp


class SignOutView(APIView):
    """Blacklist the refresh token and delete the caller's cart."""

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signout"
    permission_classes = [AllowAny]

    @extend_schema(tags=["User Endpoints"], request=SignOutSerializer)
    def post(self, request):
        serializer = SignOutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            token = RefreshToken(serializer.validated_data["refresh"])
            token.blacklist()
        except TokenError:
            log_auth_event("signout", request, status="invalid_token")
            return Response({"detail": "Invalid token."}, status=status.HTTP_400_BAD_REQUEST)
        identity = identity_from_request(request)
        if identity.user_id is None and token.payload.get("user_id") is not None:
            identity = replace(identity, user_id=int(token.payload["user_id"]))
        if not identity.is_empty:
            sign_out(identity)
        log_auth_event("signout", request, status="success")
        return Response({"detail": "Signed out."}, status=status.HTTP_205_RESET_CONTENT)


class AdminUserDetailView(APIView):
    permission_classes = [IsAdminUser]
    throttle_scope = "profile"

    @extend_schema(tags=["Admin Endpoints"], summary="Update user name and role", request=AdminUserUpdateSerializer)
    def patch(self, request, user_id: int):
        serializer = AdminUserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = update_user(user_id=user_id, **serializer.validated_data)
        return Response(result.as_dict(), status=result_status(result))

    @extend_schema(tags=["Admin Endpoints"], summary="Delete user")
    def delete(self, request, user_id: int):
        result = delete_user(user_id=user_id)
        return Response(result.as_dict(), status=result_status(result))
