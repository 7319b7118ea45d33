from django.urls import path
from . import views

app_name = 'redemptions'

urlpatterns = [
    # Subscriber
    path('items/<uuid:item_id>/redeem/', views.redeem_item, name='redeem'),
    path('stats/', views.my_stats, name='my-stats'),

    # Partner
    path('verify/', views.verify_token, name='verify'),
    path('partner/stats/', views.partner_stats, name='partner-stats'),
]
