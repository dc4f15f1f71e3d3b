import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import fleet.models.core
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Truck',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('current_latitude', models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True)),
                ('current_longitude', models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True)),
                ('current_address', models.CharField(blank=True, max_length=255)),
                ('last_location_update', models.DateTimeField(blank=True, null=True)),
                ('truck_number', models.CharField(max_length=20, unique=True)),
                ('plate_number', models.CharField(max_length=20, unique=True)),
                ('capacity', models.PositiveIntegerField(help_text='Capacity in kilograms')),
                ('truck_type', models.CharField(choices=[('container', 'Container'), ('flatbed', 'Flatbed'), ('refrigerated', 'Refrigerated'), ('tanker', 'Tanker'), ('van', 'Van')], max_length=20)),
                ('status', models.CharField(choices=[('available', 'Available'), ('assigned', 'Assigned'), ('maintenance', 'Maintenance'), ('out_of_service', 'Out of Service')], default='available', max_length=20)),
                ('assigned_driver_id', models.PositiveBigIntegerField(blank=True, null=True)),
                ('current_request_id', models.PositiveBigIntegerField(blank=True, null=True)),
                ('length', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('width', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('height', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ('fuel_type', models.CharField(choices=[('diesel', 'Diesel'), ('petrol', 'Petrol'), ('electric', 'Electric'), ('hybrid', 'Hybrid')], default='diesel', max_length=20)),
                ('last_service', models.DateField(blank=True, null=True)),
                ('next_service', models.DateField(blank=True, null=True)),
                ('mileage', models.PositiveIntegerField(default=0, help_text='Odometer reading in km')),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['truck_number'],
                'indexes': [
                    models.Index(fields=['status'], name='fleet_truck_status_idx'),
                    models.Index(fields=['truck_type'], name='fleet_truck_type_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='DriverProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('current_latitude', models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True)),
                ('current_longitude', models.DecimalField(blank=True, decimal_places=6, max_digits=9, null=True)),
                ('current_address', models.CharField(blank=True, max_length=255)),
                ('last_location_update', models.DateTimeField(blank=True, null=True)),
                ('license_number', models.CharField(max_length=32, unique=True)),
                ('license_expiry', models.DateField()),
                ('license_type', models.CharField(choices=[('LMV', 'Light Motor Vehicle'), ('HMV', 'Heavy Motor Vehicle'), ('TRANSPORT', 'Transport')], max_length=10)),
                ('phone', models.CharField(max_length=32)),
                ('emergency_contact', models.JSONField(blank=True, default=fleet.models.core.default_emergency_contact)),
                ('address', models.JSONField(blank=True, default=fleet.models.core.default_address)),
                ('experience_years', models.PositiveSmallIntegerField(default=0)),
                ('previous_companies', models.JSONField(blank=True, default=list)),
                ('current_truck_id', models.PositiveBigIntegerField(blank=True, null=True)),
                ('status', models.CharField(choices=[('available', 'Available'), ('assigned', 'Assigned'), ('on_trip', 'On Trip'), ('on_leave', 'On Leave'), ('off_duty', 'Off Duty')], default='available', max_length=20)),
                ('average_rating', models.DecimalField(decimal_places=2, default=0, max_digits=3, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(5)])),
                ('total_ratings', models.PositiveIntegerField(default=0)),
                ('join_date', models.DateField(default=django.utils.timezone.localdate)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='driver_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['status'], name='fleet_driver_status_idx')],
            },
        ),
    ]
