import django.db.models.deletion
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Collection',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=150)),
                ('slug', models.SlugField(max_length=160, unique=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'collections',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('slug', models.SlugField(max_length=255, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('base_price', models.PositiveIntegerField(help_text='Listed selling price')),
                ('min_price', models.PositiveIntegerField(help_text='Lowest price the product may be sold at')),
                ('cost_price', models.PositiveIntegerField(blank=True, null=True)),
                ('compare_price', models.PositiveIntegerField(blank=True, help_text='Crossed-out "before" price', null=True)),
                ('status', models.CharField(choices=[('AVAILABLE', 'Available'), ('BACKORDER', 'Backorder'), ('PRESALE', 'Presale')], default='AVAILABLE', max_length=20)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('collection', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='products', to='catalog.collection')),
            ],
            options={
                'db_table': 'products',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['collection'], name='products_collect_0b7d3e_idx'),
                    models.Index(fields=['is_active', 'created_at'], name='products_is_acti_4e8f21_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ProductImage',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('url', models.CharField(max_length=500)),
                ('alt', models.CharField(blank=True, default='', max_length=255)),
                ('position', models.PositiveIntegerField(default=0)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='images', to='catalog.product')),
            ],
            options={
                'db_table': 'product_images',
                'ordering': ['position'],
            },
        ),
        migrations.CreateModel(
            name='Variant',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('sku', models.CharField(help_text='Stock Keeping Unit', max_length=150, unique=True)),
                ('color', models.CharField(max_length=50)),
                ('image_url', models.CharField(blank=True, max_length=500, null=True)),
                ('stock', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='variants', to='catalog.product')),
            ],
            options={
                'db_table': 'variants',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['product'], name='variants_product_9a3c55_idx')],
            },
        ),
    ]
