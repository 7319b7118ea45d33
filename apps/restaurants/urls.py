from django.urls import path
from . import views

app_name = 'restaurants'

urlpatterns = [
    # Catalog
    path('', views.restaurant_list, name='restaurant-list'),
    path('markets/', views.market_list, name='market-list'),

    # Partner session
    path('partner/options/', views.partner_restaurant_options, name='partner-options'),
    path('partner/login/', views.partner_login, name='partner-login'),
    path('partner/logout/', views.partner_logout, name='partner-logout'),
    path('partner/session/', views.partner_session, name='partner-session'),
]
