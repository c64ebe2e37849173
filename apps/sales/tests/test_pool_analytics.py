import pytest
from datetime import date
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.sales.services import get_member_profit_breakdown, get_pool_kpis, settle_sale
from apps.vehicles.models import Vehicle


@pytest.fixture
def pool(vehicle_with_expenses, other_member, fee_setting):
    """One profitable sale, one loss and one vehicle still in stock."""
    member = vehicle_with_expenses.member
    settle_sale(actor=member, vehicle_id=vehicle_with_expenses.id, sold_price='13000')

    loss = Vehicle.objects.create(
        member=other_member,
        vin='LOSS1',
        model='Clio',
        year=2012,
        purchase_price=Decimal('5000.00'),
        purchase_date=date(2024, 5, 10),
    )
    settle_sale(actor=other_member, vehicle_id=loss.id, sold_price='4000')

    Vehicle.objects.create(
        member=member,
        vin='STOCK1',
        model='Yaris',
        year=2015,
        purchase_price=Decimal('2000.00'),
        purchase_date=date(2024, 7, 1),
    )
    return member, other_member


@pytest.mark.django_db
class TestPoolKPIs:

    def test_empty_pool(self, db):
        kpis = get_pool_kpis()

        assert kpis['total_invested'] == Decimal('0.00')
        assert kpis['net_profit'] == Decimal('0.00')
        assert kpis['vehicles_sold'] == 0
        assert kpis['average_profit_ratio'] == Decimal('0.00')

    def test_totals(self, pool, admin_account):
        kpis = get_pool_kpis()

        assert kpis['total_invested'] == Decimal('17000.00')
        assert kpis['total_revenue'] == Decimal('17000.00')
        assert kpis['gross_profit'] == Decimal('1500.00')
        assert kpis['net_profit'] == Decimal('1250.00')
        assert kpis['total_franchise_fees'] == Decimal('250.00')
        assert kpis['vehicles_bought'] == 3
        assert kpis['vehicles_in_stock'] == 1
        assert kpis['vehicles_sold'] == 2
        assert kpis['total_members'] == 2
        # (18.75 + -20.00) / 2
        assert kpis['average_profit_ratio'] == Decimal('-0.63')

    def test_purchase_date_window(self, pool):
        kpis = get_pool_kpis(start_date=date(2024, 4, 1))

        assert kpis['total_invested'] == Decimal('7000.00')
        assert kpis['total_revenue'] == Decimal('4000.00')
        assert kpis['net_profit'] == Decimal('-1000.00')
        assert kpis['total_franchise_fees'] == Decimal('0.00')
        assert kpis['vehicles_bought'] == 2
        assert kpis['vehicles_sold'] == 1

    def test_sale_counts_after_vehicle_deleted(self, vehicle, fee_setting):
        settle_sale(actor=vehicle.member, vehicle_id=vehicle.id, sold_price='12000')
        vehicle.delete()

        kpis = get_pool_kpis()

        assert kpis['vehicles_sold'] == 1
        assert kpis['net_profit'] == Decimal('1800.00')
        assert kpis['total_invested'] == Decimal('0.00')


@pytest.mark.django_db
class TestMemberProfitBreakdown:

    def test_sorted_by_net_profit(self, pool):
        member, other_member = pool

        breakdown = get_member_profit_breakdown()

        assert [row['member'] for row in breakdown] == [member, other_member]
        assert breakdown[0]['total_invested'] == Decimal('12000.00')
        assert breakdown[0]['net_profit'] == Decimal('2250.00')
        assert breakdown[0]['franchise_fees'] == Decimal('250.00')
        assert breakdown[0]['vehicles_bought'] == 2
        assert breakdown[0]['vehicles_sold'] == 1
        assert breakdown[0]['profit_ratio'] == Decimal('18.75')
        assert breakdown[1]['profit_ratio'] == Decimal('-20.00')

    def test_members_without_activity_are_left_out(self, member, db):
        assert get_member_profit_breakdown() == []

    def test_window_excludes_earlier_purchases(self, pool):
        member, other_member = pool

        breakdown = get_member_profit_breakdown(start_date=date(2024, 6, 1))

        assert len(breakdown) == 1
        assert breakdown[0]['member'] == member
        assert breakdown[0]['total_invested'] == Decimal('2000.00')
        assert breakdown[0]['net_profit'] == Decimal('0.00')


@pytest.mark.django_db
class TestPoolAnalyticsAPI:

    def test_admin_reads_kpis(self, admin_client, pool):
        response = admin_client.get(reverse('sales:pool-kpis'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['net_profit'] == '1250.00'
        assert response.data['total_franchise_fees'] == '250.00'

    def test_kpis_with_window(self, admin_client, pool):
        response = admin_client.get(reverse('sales:pool-kpis'), {'start_date': '2024-04-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['vehicles_bought'] == 2

    def test_invalid_window(self, admin_client):
        response = admin_client.get(
            reverse('sales:pool-kpis'),
            {'start_date': '2024-05-01', 'end_date': '2024-04-01'},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_member_profit(self, admin_client, pool):
        member, _ = pool

        response = admin_client.get(reverse('sales:member-profit'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['member']['id'] == str(member.id)
        assert response.data[0]['net_profit'] == '2250.00'

    @pytest.mark.parametrize('url_name', ['sales:pool-kpis', 'sales:member-profit'])
    def test_members_forbidden(self, member_client, url_name):
        response = member_client.get(reverse(url_name))

        assert response.status_code == status.HTTP_403_FORBIDDEN
