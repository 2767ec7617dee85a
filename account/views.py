from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.authentication import JWTAuthentication

from account.serializers import UserSerializer


@extend_schema(
    summary="Customer registration",
    description=(
            "Creates a new customer account.\n\n"
            "Staff, manager and admin roles are granted from the admin site only."
    ),
    request=UserSerializer,
    responses={
        201: UserSerializer,
        400: OpenApiResponse(description="Validation error"),
    },
)
class CreateUserView(generics.CreateAPIView):
    serializer_class = UserSerializer
    authentication_classes = ()
    permission_classes = (AllowAny,)


@extend_schema(
    summary="Retrieve or update current user",
    description=(
            "Returns or updates the authenticated user's profile.\n\n"
            "Authentication: JWT required."
    ),
    responses={
        200: UserSerializer,
        401: OpenApiResponse(
            description="Authentication credentials were not provided"),
    },
)
class ManageUserView(generics.RetrieveUpdateAPIView):
    serializer_class = UserSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get_object(self):
        return self.request.user
