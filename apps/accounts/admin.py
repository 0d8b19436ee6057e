from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, Verification, ResetPassword


class VerificationInline(admin.TabularInline):
    model = Verification
    extra = 0
    fields = ['email', 'expires_in', 'created_at']
    readonly_fields = fields
    can_delete = True


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for the email-based User model."""

    list_display = [
        'email',
        'first_name',
        'last_name',
        'is_active',
        'email_verified_badge',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'is_superuser',
        'email_verified',
        'created_at',
    ]

    search_fields = ['email', 'first_name', 'last_name']

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    # BaseUserAdmin references a username field this model does not have
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'first_name', 'last_name', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Verification', {
            'fields': ('email_verified',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'updated_at', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']
    inlines = [VerificationInline]

    def email_verified_badge(self, obj):
        """Display email verification status as colored badge."""
        if obj.email_verified:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Verified</span>'
            )
        return format_html(
            '<span style="background: #E5C49A; color: #2C1810; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Pending</span>'
        )
    email_verified_badge.short_description = 'Email'
    email_verified_badge.admin_order_field = 'email_verified'


@admin.register(Verification)
class VerificationAdmin(admin.ModelAdmin):
    list_display = ['email', 'user', 'expires_in', 'is_expired', 'created_at']
    search_fields = ['email', 'user__email']
    list_filter = ['expires_in']
    readonly_fields = ['access_token', 'created_at', 'updated_at']

    @admin.display(boolean=True, description='Expired')
    def is_expired(self, obj):
        return obj.is_expired


@admin.register(ResetPassword)
class ResetPasswordAdmin(admin.ModelAdmin):
    list_display = ['user', 'expires_in', 'is_expired', 'created_at']
    search_fields = ['user__email']
    readonly_fields = ['access_token', 'created_at', 'updated_at']

    @admin.display(boolean=True, description='Expired')
    def is_expired(self, obj):
        return obj.is_expired
