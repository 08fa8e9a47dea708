# Generated manually for the inventory app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Item',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('channel', models.CharField(blank=True, choices=[('ebay', 'eBay'), ('kaitori', 'Kaitori (buyback)'), ('other', 'Other')], max_length=20)),
                ('jan_code', models.CharField(blank=True, max_length=32)),
                ('product_name', models.CharField(max_length=255)),
                ('quantity_total', models.PositiveIntegerField(default=1)),
                ('quantity_available', models.PositiveIntegerField(blank=True, null=True)),
                ('purchase_price', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('point', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('purchase_date', models.DateField()),
                ('purchase_location', models.CharField(blank=True, max_length=200)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('inventory', 'Inventory'), ('sold', 'Sold'), ('canceled', 'Canceled')], default='pending', max_length=20)),
                ('sale_price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('sale_location', models.CharField(blank=True, max_length=200)),
                ('sale_date', models.DateField(blank=True, null=True)),
                ('schema_version', models.PositiveSmallIntegerField(default=2)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'items',
                'ordering': ['-purchase_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['owner', 'status'], name='items_owner_status_idx'),
                    models.Index(fields=['owner', 'channel'], name='items_owner_channel_idx'),
                    models.Index(fields=['owner', 'purchase_date'], name='items_owner_pdate_idx'),
                    models.Index(fields=['owner', 'sale_date'], name='items_owner_sdate_idx'),
                ],
            },
        ),
    ]
