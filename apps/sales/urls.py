from django.urls import path
from . import views

app_name = 'sales'

urlpatterns = [
    # GET  /api/sales/                              - List settlements
    # POST /api/sales/                              - Settle a sale
    path('', views.settlement_list, name='settlement-list'),
    path('<uuid:settlement_id>/', views.settlement_detail, name='settlement-detail'),
    path('vehicle/<uuid:vehicle_id>/', views.vehicle_settlement, name='vehicle-settlement'),

    # Statistics
    path('me/statistics/', views.my_statistics, name='my-statistics'),
    path('members/<uuid:member_id>/statistics/', views.member_statistics, name='member-statistics'),

    # Pool analytics (admin)
    path('analytics/kpis/', views.pool_kpis, name='pool-kpis'),
    path('analytics/member-profit/', views.member_profit, name='member-profit'),
]
