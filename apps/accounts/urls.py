from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('user/', views.get_current_user, name='current-user'),

    # Subscriber profile
    path('onboarding/', views.onboarding, name='onboarding'),
    path('onboarding/details/', views.onboarding_details, name='onboarding-details'),
    path('profile/', views.profile, name='profile'),
]
