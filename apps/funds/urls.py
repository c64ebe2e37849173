from django.urls import path
from . import views

app_name = 'funds'

urlpatterns = [
    # Movements
    path('movements/', views.movement_list, name='movement-list'),
    path('movements/stats/', views.movement_stats, name='movement-stats'),
    path('movements/<uuid:movement_id>/', views.movement_detail, name='movement-detail'),
    path('movements/<uuid:movement_id>/review/', views.movement_review, name='movement-review'),

    # Balances
    path('balance/', views.my_balance, name='my-balance'),
    path('members/<uuid:member_id>/balance/', views.member_balance, name='member-balance'),
    path('members/<uuid:member_id>/adjust/', views.member_adjust, name='member-adjust'),
]
