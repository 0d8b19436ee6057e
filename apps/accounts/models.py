from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone
import uuid


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('email_verified', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)

    # Lookups return None instead of raising so callers can branch on presence.
    # Email matching is case-insensitive: one mailbox, one account.

    def get_by_email(self, email):
        return self.filter(email__iexact=email).first()

    def get_by_id(self, user_id):
        return self.filter(id=user_id).first()

    def is_exist_by_email(self, email, exclude_user_id=None):
        queryset = self.filter(email__iexact=email)
        if exclude_user_id is not None:
            queryset = queryset.exclude(id=exclude_user_id)
        return queryset.exists()

    # Single-row writes. Each returns the number of rows updated.

    def update_profile_by_user_id(self, user_id, *, first_name, last_name):
        return self.filter(id=user_id).update(
            first_name=first_name,
            last_name=last_name,
            updated_at=timezone.now(),
        )

    def update_email_by_user_id(self, user_id, email):
        """Change the address and mark it unverified until confirmed."""
        return self.filter(id=user_id).update(
            email=email,
            email_verified=False,
            updated_at=timezone.now(),
        )

    def update_password_by_user_id(self, user_id, hashed_password):
        return self.filter(id=user_id).update(
            password=hashed_password,
            updated_at=timezone.now(),
        )

    def update_verification_and_email_by_user_id(self, user_id, email):
        return self.filter(id=user_id).update(
            email=email,
            email_verified=True,
            updated_at=timezone.now(),
        )

    def delete_by_id(self, user_id):
        return self.filter(id=user_id).delete()


class User(AbstractBaseUser, PermissionsMixin):
    """Custom user model with email authentication."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)

    email_verified = models.BooleanField(default=False)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_6541e9_idx'),
        ]

    def __str__(self):
        return self.email

    def get_full_name(self):
        """Return 'first last', falling back to the email prefix."""
        full_name = f'{self.first_name} {self.last_name}'.strip()
        return full_name or self.email.split('@')[0]


class VerificationManager(models.Manager):

    def find_one_and_update_by_user_id_and_email(
        self, *, user_id, email, access_token, expires_in
    ):
        """Refresh the token of an existing record, or return None."""
        verification = self.filter(user_id=user_id, email=email).first()
        if verification is None:
            return None

        verification.access_token = access_token
        verification.expires_in = expires_in
        verification.save(update_fields=['access_token', 'expires_in', 'updated_at'])
        return verification

    def upsert_by_user_id_and_email(self, *, user_id, email, access_token, expires_in):
        """
        Create or refresh the verification record for (user, email).

        Returns:
            Tuple of (Verification, created)
        """
        fields = {
            'user_id': user_id,
            'email': email,
            'access_token': access_token,
            'expires_in': expires_in,
        }
        verification = self.find_one_and_update_by_user_id_and_email(**fields)
        if verification is not None:
            return verification, False
        return self.create(**fields), True

    def get_by_valid_access_token(self, access_token):
        return (
            self.filter(access_token=access_token, expires_in__gt=timezone.now())
            .first()
        )

    def delete_many_by_user_id(self, user_id):
        return self.filter(user_id=user_id).delete()


class Verification(models.Model):
    """Pending proof of ownership for an email address."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='verifications',
    )
    email = models.EmailField(max_length=255)
    access_token = models.CharField(max_length=64, unique=True)
    expires_in = models.DateTimeField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = VerificationManager()

    class Meta:
        db_table = 'verifications'
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'email'],
                name='unique_verification_per_user_email',
            ),
        ]
        indexes = [
            models.Index(fields=['expires_in'], name='verificatio_expires_3f0b2a_idx'),
        ]

    def __str__(self):
        return f'Verification for {self.email}'

    @property
    def is_expired(self):
        return timezone.now() >= self.expires_in


class ResetPasswordManager(models.Manager):

    def upsert_by_user_id(self, *, user_id, access_token, expires_in):
        return self.update_or_create(
            user_id=user_id,
            defaults={
                'access_token': access_token,
                'expires_in': expires_in,
            },
        )

    def get_by_valid_access_token(self, access_token):
        return (
            self.filter(access_token=access_token, expires_in__gt=timezone.now())
            .first()
        )

    def delete_many_by_user_id(self, user_id):
        return self.filter(user_id=user_id).delete()


class ResetPassword(models.Model):
    """Pending password reset for a user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='reset_passwords',
    )
    access_token = models.CharField(max_length=64, unique=True)
    expires_in = models.DateTimeField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ResetPasswordManager()

    class Meta:
        db_table = 'reset_passwords'
        constraints = [
            models.UniqueConstraint(fields=['user'], name='unique_reset_password_per_user'),
        ]

    def __str__(self):
        return f'Password reset for {self.user_id}'

    @property
    def is_expired(self):
        return timezone.now() >= self.expires_in
