import django.core.validators
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='B2BQuote',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('business_name', models.CharField(max_length=255)),
                ('quantity', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('department', models.CharField(max_length=100)),
                ('municipality', models.CharField(max_length=100)),
                ('neighborhood', models.CharField(max_length=150)),
                ('address', models.CharField(max_length=255)),
                ('contact_phone', models.CharField(max_length=30)),
                ('qr_type', models.CharField(choices=[('WHATSAPP', 'WhatsApp'), ('WEB', 'Web'), ('INSTAGRAM', 'Instagram')], max_length=20)),
                ('qr_data', models.CharField(help_text='Phone, URL or handle encoded in the QR', max_length=500)),
                ('package', models.CharField(choices=[('STARTER', 'Starter'), ('PRO', 'Pro'), ('EVENTO', 'Evento')], max_length=20)),
                ('logo_url', models.CharField(blank=True, max_length=500, null=True)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('DESIGN_APPROVED', 'Design approved')], default='PENDING', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'B2B quote',
                'db_table': 'b2b_quotes',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['status'], name='b2b_quotes_status_e4b1d7_idx')],
            },
        ),
    ]
