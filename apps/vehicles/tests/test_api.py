import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.vehicles.models import Vehicle, AdditionalExpense


@pytest.mark.django_db
class TestVehicleAPI:

    def test_list_requires_auth(self, api_client):
        response = api_client.get(reverse('vehicles:vehicle-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_member_lists_own(self, member_client, vehicle, other_member):
        Vehicle.objects.create(
            member=other_member, vin='OTHER', model='Polo', year=2010,
            purchase_price=Decimal('100'),
        )

        response = member_client.get(reverse('vehicles:vehicle-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['vin'] == vehicle.vin

    def test_list_with_filters(self, member_client, vehicle, sold_vehicle):
        response = member_client.get(reverse('vehicles:vehicle-list'), {'status': 'sold'})

        assert response.data['count'] == 1
        assert response.data['results'][0]['id'] == str(sold_vehicle.id)

    def test_create(self, member_client, member):
        data = {
            'vin': 'NEWVIN123',
            'make': 'Skoda',
            'model': 'Octavia',
            'year': 2017,
            'purchase_price': '5400.00',
        }
        response = member_client.post(reverse('vehicles:vehicle-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'in_stock'
        assert Vehicle.objects.get(vin='NEWVIN123').member == member

    def test_create_duplicate_vin(self, member_client, vehicle):
        data = {'vin': vehicle.vin, 'model': 'Accord', 'year': 2018, 'purchase_price': '1.00'}
        response = member_client.post(reverse('vehicles:vehicle-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_admin_create_unknown_member(self, admin_client):
        data = {
            'vin': 'ADMIN1',
            'model': 'Octavia',
            'year': 2017,
            'purchase_price': '5400.00',
            'member_id': '00000000-0000-0000-0000-000000000000',
        }
        response = admin_client.post(reverse('vehicles:vehicle-list'), data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_retrieve_other_member_vehicle(self, other_client, vehicle):
        url = reverse('vehicles:vehicle-detail', args=[vehicle.id])
        response = other_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_partial_update(self, member_client, vehicle):
        url = reverse('vehicles:vehicle-detail', args=[vehicle.id])
        response = member_client.patch(url, {'notes': 'Serviced'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['notes'] == 'Serviced'

    def test_delete(self, member_client, vehicle):
        url = reverse('vehicles:vehicle-detail', args=[vehicle.id])
        response = member_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Vehicle.objects.filter(id=vehicle.id).exists()


@pytest.mark.django_db
class TestExpenseAPI:

    def test_add_and_list(self, member_client, vehicle):
        url = reverse('vehicles:vehicle-expenses', args=[vehicle.id])
        response = member_client.post(url, {'amount': '120.00', 'description': 'Oil'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED

        response = member_client.get(url)
        assert len(response.data) == 1
        assert response.data[0]['amount'] == '120.00'

    def test_add_to_sold_vehicle_conflict(self, member_client, sold_vehicle):
        url = reverse('vehicles:vehicle-expenses', args=[sold_vehicle.id])
        response = member_client.post(url, {'amount': '10.00', 'description': 'Late'}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_add_zero_amount(self, member_client, vehicle):
        url = reverse('vehicles:vehicle-expenses', args=[vehicle.id])
        response = member_client.post(url, {'amount': '0.00', 'description': 'Free'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_total(self, member_client, expense):
        url = reverse('vehicles:vehicle-expenses-total', args=[expense.vehicle_id])
        response = member_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == '300.00'
        assert response.data['count'] == 1

    def test_total_without_expenses(self, member_client, vehicle):
        url = reverse('vehicles:vehicle-expenses-total', args=[vehicle.id])
        response = member_client.get(url)

        assert response.data['total'] == '0.00'

    def test_expense_detail_update(self, member_client, expense):
        url = reverse('vehicles:expense-detail', args=[expense.id])
        response = member_client.patch(url, {'amount': '350.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['amount'] == '350.00'

    def test_expense_detail_delete_by_admin(self, admin_client, expense):
        url = reverse('vehicles:expense-detail', args=[expense.id])
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not AdditionalExpense.objects.filter(id=expense.id).exists()

    def test_expense_detail_other_member(self, other_client, expense):
        url = reverse('vehicles:expense-detail', args=[expense.id])
        response = other_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
