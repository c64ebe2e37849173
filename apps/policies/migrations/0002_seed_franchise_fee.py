# Generated manually to seed the franchise fee setting
from django.conf import settings
from django.db import migrations


def seed_franchise_fee(apps, schema_editor):
    """Create the franchise fee setting with no fee."""
    AppSetting = apps.get_model('policies', 'AppSetting')
    AppSetting.objects.get_or_create(
        key=settings.FRANCHISE_FEE_SETTING_KEY,
        defaults={
            'value': '0',
            'description': 'Percentage of positive sale profit retained as franchise fee.',
        },
    )


def remove_franchise_fee(apps, schema_editor):
    AppSetting = apps.get_model('policies', 'AppSetting')
    AppSetting.objects.filter(key=settings.FRANCHISE_FEE_SETTING_KEY).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('policies', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_franchise_fee, remove_franchise_fee),
    ]
