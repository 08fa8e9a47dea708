# Generated manually for the batches app

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
        ('inventory', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='SaleBatch',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('method', models.CharField(choices=[('shipping', 'Shipping'), ('in_store', 'In store')], max_length=20)),
                ('buyer', models.CharField(max_length=200)),
                ('campaign', models.CharField(blank=True, max_length=200)),
                ('shipping_cost', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('status', models.CharField(choices=[('in_progress', 'In progress'), ('confirmed', 'Confirmed')], default='in_progress', max_length=20)),
                ('item_count', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('confirmed_at', models.DateTimeField(blank=True, null=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sale_batches', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'sale_batches',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'sale batches',
                'indexes': [
                    models.Index(fields=['owner', '-created_at'], name='batches_owner_created_idx'),
                    models.Index(fields=['owner', 'status'], name='batches_owner_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SaleBatchItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('product_name', models.CharField(max_length=255)),
                ('quantity', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('purchase_price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('point', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('status', models.CharField(choices=[('in_progress', 'In progress'), ('confirmed', 'Confirmed')], default='in_progress', max_length=20)),
                ('final_price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('confirmed_at', models.DateTimeField(blank=True, null=True)),
                ('batch', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='batches.salebatch')),
                ('item', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='batch_lines', to='inventory.item')),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sale_batch_items', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'sale_batch_items',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['batch', 'status'], name='batch_items_batch_status_idx'),
                ],
            },
        ),
    ]
