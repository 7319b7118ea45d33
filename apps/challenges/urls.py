from django.urls import path
from . import views

app_name = 'challenges'

urlpatterns = [
    path('current/', views.current_challenge, name='current'),
    path('generate/', views.generate_challenge, name='generate'),
    path('items/<uuid:item_id>/swap/', views.swap_item, name='swap'),
]
