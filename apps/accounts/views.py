import logging

from rest_framework import serializers
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from drf_spectacular.utils import extend_schema, inline_serializer

from apps.core.responses import APIResponse
from .authentication import OptionalJWTAuthentication
from .serializers import (
    UserSerializer,
    UserRegistrationSerializer,
    UserLoginSerializer,
    VerificationRequestSerializer,
    UpdateProfileSerializer,
    UpdateEmailSerializer,
    UpdatePasswordSerializer,
    DeleteProfileSerializer,
    PasswordResetRequestSerializer,
    PasswordResetConfirmSerializer,
    AccessTokenSerializer,
    AuthDataSerializer,
)
from .services import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    PasswordConfirmationError,
    register_user,
    authenticate_user,
    request_password_reset,
    confirm_password_reset,
    request_email_verification,
    confirm_email_verification,
    update_profile as update_profile_service,
    update_email as update_email_service,
    update_password as update_password_service,
    delete_user_account,
)
from .utils import jwt_sign

logger = logging.getLogger(__name__)


# Response serializers for API documentation
class EnvelopeSerializer(serializers.Serializer):
    message = serializers.CharField()
    status = serializers.IntegerField()


def enveloped(name, data):
    """Schema for an envelope carrying ``data``."""
    return inline_serializer(
        name=name,
        fields={
            'data': data,
            'message': serializers.CharField(),
            'status': serializers.IntegerField(),
        },
    )


# =============================================================================
# Authentication
# =============================================================================

@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: enveloped('RegisterResponse', AuthDataSerializer()),
        400: EnvelopeSerializer,
        409: EnvelopeSerializer,
    },
    description="Register a new account and send a verification email.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    if not serializer.is_valid():
        return APIResponse.bad_request()

    try:
        user = register_user(**serializer.validated_data)
        tokens = jwt_sign(user)
    except EmailAlreadyExistsError:
        return APIResponse.conflict()
    except Exception:
        logger.exception("Registration failed")
        return APIResponse.bad_request()

    return APIResponse.created({'user': UserSerializer(user).data, **tokens})


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: enveloped('LoginResponse', AuthDataSerializer()),
        400: EnvelopeSerializer,
        401: EnvelopeSerializer,
        403: EnvelopeSerializer,
    },
    description="Authenticate with email and password to receive a JWT.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    if not serializer.is_valid():
        return APIResponse.bad_request()

    try:
        user = authenticate_user(**serializer.validated_data)
        tokens = jwt_sign(user)
    except InvalidCredentialsError:
        return APIResponse.unauthorized()
    except InactiveAccountError:
        return APIResponse.forbidden()
    except Exception:
        logger.exception("Login failed")
        return APIResponse.bad_request()

    return APIResponse.ok({'user': UserSerializer(user).data, **tokens})


@extend_schema(
    request=PasswordResetRequestSerializer,
    responses={200: EnvelopeSerializer, 400: EnvelopeSerializer},
    description="Request a password reset email. Always succeeds for a valid address.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def password_reset(request):
    """Request password reset email."""
    serializer = PasswordResetRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return APIResponse.bad_request()

    try:
        request_password_reset(email=serializer.validated_data['email'])
    except Exception:
        logger.exception("Password reset request failed")
        return APIResponse.bad_request()

    return APIResponse.ok()


@extend_schema(
    request=PasswordResetConfirmSerializer,
    responses={200: EnvelopeSerializer, 400: EnvelopeSerializer, 403: EnvelopeSerializer},
    description="Set a new password using the token from the reset email.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def password_reset_confirm(request):
    """Confirm password reset with token."""
    serializer = PasswordResetConfirmSerializer(data=request.data)
    if not serializer.is_valid():
        return APIResponse.bad_request()

    try:
        confirm_password_reset(**serializer.validated_data)
    except InvalidTokenError:
        return APIResponse.forbidden()
    except Exception:
        logger.exception("Password reset confirmation failed")
        return APIResponse.bad_request()

    return APIResponse.ok()


# =============================================================================
# Current user
# =============================================================================

@extend_schema(
    responses={
        200: enveloped('MeResponse', UserSerializer()),
        404: EnvelopeSerializer,
    },
    description="Get the current authenticated user's profile.",
    tags=['user'],
)
@api_view(['GET'])
@authentication_classes([OptionalJWTAuthentication])
@permission_classes([AllowAny])
def me(request):
    """Return the signed-in user, or 404 when the request is anonymous."""
    if not request.user.is_authenticated:
        return APIResponse.not_found()

    return APIResponse.ok(UserSerializer(request.user).data)


@extend_schema(
    request=VerificationRequestSerializer,
    responses={200: EnvelopeSerializer, 400: EnvelopeSerializer, 409: EnvelopeSerializer},
    description="Send a verification link for an email address.",
    tags=['user'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def verification_request(request):
    serializer = VerificationRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return APIResponse.bad_request()

    try:
        request_email_verification(
            user=request.user,
            email=serializer.validated_data['email'],
        )
    except EmailAlreadyExistsError:
        return APIResponse.conflict()
    except Exception:
        logger.exception(f"Verification request failed for user {request.user.id}")
        return APIResponse.bad_request()

    return APIResponse.ok()


@extend_schema(
    request=None,
    responses={
        200: enveloped('VerificationResponse', AccessTokenSerializer()),
        400: EnvelopeSerializer,
        403: EnvelopeSerializer,
    },
    description="Confirm an email address with the token from the verification email.",
    tags=['user'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def verification(request, access_token):
    try:
        tokens = confirm_email_verification(access_token=access_token)
    except InvalidTokenError:
        return APIResponse.forbidden()
    except Exception:
        logger.exception("Email verification failed")
        return APIResponse.bad_request()

    return APIResponse.ok(tokens)


@extend_schema(
    request=UpdateProfileSerializer,
    responses={
        200: enveloped('UpdateProfileResponse', UpdateProfileSerializer()),
        400: EnvelopeSerializer,
    },
    description="Update first and last name.",
    tags=['user'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    serializer = UpdateProfileSerializer(data=request.data)
    if not serializer.is_valid():
        return APIResponse.bad_request()

    try:
        data = update_profile_service(user=request.user, **serializer.validated_data)
    except Exception:
        logger.exception(f"Profile update failed for user {request.user.id}")
        return APIResponse.bad_request()

    return APIResponse.ok(data)


@extend_schema(
    request=UpdateEmailSerializer,
    responses={
        200: enveloped(
            'UpdateEmailResponse',
            inline_serializer(name='EmailData', fields={'email': serializers.EmailField()}),
        ),
        400: EnvelopeSerializer,
        403: EnvelopeSerializer,
        409: EnvelopeSerializer,
    },
    description="Change the account email. Requires the current password.",
    tags=['user'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def update_email(request):
    serializer = UpdateEmailSerializer(data=request.data)
    if not serializer.is_valid():
        return APIResponse.bad_request()

    email = serializer.validated_data['email']
    try:
        changed = update_email_service(
            user=request.user,
            email=email,
            password=serializer.validated_data['password'],
        )
    except EmailAlreadyExistsError:
        return APIResponse.conflict()
    except PasswordConfirmationError:
        return APIResponse.forbidden()
    except Exception:
        logger.exception(f"Email update failed for user {request.user.id}")
        return APIResponse.bad_request()

    if not changed:
        return APIResponse.ok()
    return APIResponse.ok({'email': email})


@extend_schema(
    request=UpdatePasswordSerializer,
    responses={200: EnvelopeSerializer, 400: EnvelopeSerializer, 403: EnvelopeSerializer},
    description="Change the password. Requires the current password.",
    tags=['user'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def update_password(request):
    serializer = UpdatePasswordSerializer(data=request.data)
    if not serializer.is_valid():
        return APIResponse.bad_request()

    try:
        update_password_service(email=request.user.email, **serializer.validated_data)
    except PasswordConfirmationError:
        return APIResponse.forbidden()
    except Exception:
        logger.exception(f"Password update failed for user {request.user.id}")
        return APIResponse.bad_request()

    return APIResponse.ok()


@extend_schema(
    request=DeleteProfileSerializer,
    responses={200: EnvelopeSerializer, 400: EnvelopeSerializer, 403: EnvelopeSerializer},
    description="Permanently delete the account and its pending tokens.",
    tags=['user'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def delete_profile(request):
    serializer = DeleteProfileSerializer(data=request.data)
    if not serializer.is_valid():
        return APIResponse.bad_request()

    try:
        delete_user_account(
            email=request.user.email,
            password=serializer.validated_data['password'],
        )
    except PasswordConfirmationError:
        return APIResponse.forbidden()
    except Exception:
        logger.exception(f"Account deletion failed for user {request.user.id}")
        return APIResponse.bad_request()

    return APIResponse.ok()
