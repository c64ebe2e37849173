from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'vehicles'

router = DefaultRouter()
router.register(r'', views.VehicleViewSet, basename='vehicle')

urlpatterns = [
    # Vehicle ViewSet routes
    # GET    /api/vehicles/                     - List vehicles
    # POST   /api/vehicles/                     - Add vehicle
    # GET    /api/vehicles/{id}/                - Vehicle details
    # PATCH  /api/vehicles/{id}/                - Edit vehicle
    # DELETE /api/vehicles/{id}/                - Delete vehicle
    # GET    /api/vehicles/{id}/expenses/       - List expenses
    # POST   /api/vehicles/{id}/expenses/       - Add expense
    # GET    /api/vehicles/{id}/expenses/total/ - Expense total

    # Must precede the router so 'expenses' is not read as a vehicle id
    path('expenses/<uuid:expense_id>/', views.expense_detail, name='expense-detail'),

    path('', include(router.urls)),
]
