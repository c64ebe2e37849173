"""
Management command to create sample data for testing the API.

Usage:
    python manage.py create_sample_data

This creates:
- 1 admin and 3 members (alice, bob, charlie)
- Franchise fee setting (10%)
- Approved and pending deposits
- Vehicles with additional expenses
- Sale settlements for some vehicles
- One admin withdrawal
"""

from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction
from decimal import Decimal
from datetime import date, timedelta

from apps.accounts.models import User
from apps.funds.models import MovementStatus
from apps.funds.services import (
    request_deposit,
    review_fund_movement,
    admin_adjust_funds,
)
from apps.policies.models import AppSetting
from apps.sales.services import settle_sale
from apps.vehicles.services import create_vehicle, add_expense

SAMPLE_EMAILS = [
    'admin@example.com',
    'alice@example.com',
    'bob@example.com',
    'charlie@example.com',
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing sample data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        self.create_fee_setting(users['admin'])
        self.create_funds(users)
        vehicles = self.create_vehicles(users)
        self.create_sales(users, vehicles)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (admin)')
        self.stdout.write('  alice@example.com / password123')
        self.stdout.write('  bob@example.com / password123')
        self.stdout.write('  charlie@example.com / password123')

    def clear_data(self):
        """Delete sample users; vehicles, settlements and movements cascade."""
        User.objects.filter(email__in=SAMPLE_EMAILS).delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        admin = User.objects.filter(email='admin@example.com').first()
        if admin is None:
            admin = User.objects.create_superuser(
                email='admin@example.com',
                password='admin123',
                display_name='Pool Admin',
            )

        members = {}
        for name, display_name in [
            ('alice', 'Alice Dealer'),
            ('bob', 'Bob Broker'),
            ('charlie', 'Charlie Cars'),
        ]:
            email = f'{name}@example.com'
            member = User.objects.filter(email=email).first()
            if member is None:
                member = User.objects.create_user(
                    email=email,
                    password='password123',
                    display_name=display_name,
                )
            members[name] = member

        return {'admin': admin, **members}

    def create_fee_setting(self, admin):
        self.stdout.write('  Setting franchise fee...')

        AppSetting.objects.update_or_create(
            key=settings.FRANCHISE_FEE_SETTING_KEY,
            defaults={
                'value': '10',
                'description': 'Percentage of positive sale profit retained as franchise fee.',
                'updated_by': admin,
            },
        )

    def create_funds(self, users):
        self.stdout.write('  Creating fund movements...')

        admin = users['admin']
        for name, amount in [('alice', '30000'), ('bob', '15000'), ('charlie', '8000')]:
            admin_adjust_funds(
                admin=admin,
                member_id=users[name].id,
                amount=Decimal(amount),
                direction='deposit',
                note='Initial contribution',
            )

        approved = request_deposit(member=users['bob'], amount=Decimal('2500'), note='Top up')
        review_fund_movement(admin=admin, movement_id=approved.id, decision=MovementStatus.APPROVED)

        rejected = request_deposit(member=users['charlie'], amount=Decimal('1000'), note='Top up')
        review_fund_movement(
            admin=admin,
            movement_id=rejected.id,
            decision=MovementStatus.REJECTED,
            reason='Transfer not received',
        )

        # Left pending for review
        request_deposit(member=users['alice'], amount=Decimal('5000'), note='Second contribution')

    def create_vehicles(self, users):
        self.stdout.write('  Creating vehicles...')

        today = date.today()
        vehicle_data = [
            ('alice', 'TMBJJ7NE8J0123456', 'Skoda', 'Octavia', 2018, '9800', 90),
            ('alice', 'WVWZZZAUZHW123456', 'Volkswagen', 'Golf', 2017, '8200', 60),
            ('alice', 'VF1RFB00X57123456', 'Renault', 'Megane', 2016, '5400', 20),
            ('bob', 'WBA8E9C50GK123456', 'BMW', '320d', 2016, '11500', 75),
            ('bob', 'TMBEG7NE0K0123456', 'Skoda', 'Superb', 2019, '14900', 10),
            ('charlie', 'JTDKB20U093123456', 'Toyota', 'Yaris', 2015, '6100', 45),
        ]

        vehicles = []
        for owner, vin, make, model, year, price, days_ago in vehicle_data:
            vehicle = create_vehicle(
                actor=users['admin'] if owner == 'charlie' else users[owner],
                member_id=users[owner].id,
                vin=vin,
                make=make,
                model=model,
                year=year,
                purchase_price=Decimal(price),
                purchase_date=today - timedelta(days=days_ago),
            )
            vehicles.append(vehicle)

        expense_data = [
            (0, '450', 'Timing belt replacement'),
            (0, '120', 'Detailing'),
            (1, '300', 'New tyres'),
            (3, '680', 'Brake discs and pads'),
            (5, '90', 'Technical inspection'),
        ]
        for index, amount, description in expense_data:
            vehicle = vehicles[index]
            add_expense(
                actor=vehicle.member,
                vehicle_id=vehicle.id,
                amount=Decimal(amount),
                description=description,
            )

        return vehicles

    def create_sales(self, users, vehicles):
        self.stdout.write('  Settling sales...')

        today = date.today()
        # (vehicle index, sold price, days ago): one profit, one loss, one admin settlement
        for index, price, days_ago in [(0, '12900', 15), (3, '11800', 5), (5, '5900', 2)]:
            vehicle = vehicles[index]
            actor = users['admin'] if index == 5 else vehicle.member
            settle_sale(
                actor=actor,
                vehicle_id=vehicle.id,
                sold_price=Decimal(price),
                sold_date=today - timedelta(days=days_ago),
            )

        admin_adjust_funds(
            admin=users['admin'],
            member_id=users['alice'].id,
            amount=Decimal('2000'),
            direction='withdrawal',
            note='Profit payout',
        )
