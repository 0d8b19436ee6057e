from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),

    # Password reset
    path('password-reset/', views.password_reset, name='password-reset'),
    path('password-reset/confirm/', views.password_reset_confirm, name='password-reset-confirm'),

    # Current user
    path('user/', views.me, name='me'),
    path('user/update/profile/', views.update_profile, name='update-profile'),
    path('user/update/email/', views.update_email, name='update-email'),
    path('user/update/password/', views.update_password, name='update-password'),
    path('user/delete/', views.delete_profile, name='delete-profile'),

    # Email verification
    path('user/verification/request/', views.verification_request, name='verification-request'),
    path('user/verification/<str:access_token>/', views.verification, name='verification'),
]
