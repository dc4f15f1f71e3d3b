import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('fleet', '0001_initial'),
        ('truck_requests', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='LoadingBay',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('bay_number', models.CharField(max_length=20, unique=True)),
                ('bay_name', models.CharField(max_length=100)),
                ('location', models.CharField(max_length=255)),
                ('capacity', models.PositiveSmallIntegerField(default=1)),
                ('status', models.CharField(choices=[('available', 'Available'), ('occupied', 'Occupied'), ('maintenance', 'Maintenance'), ('reserved', 'Reserved')], default='available', max_length=20)),
                ('occupied_at', models.DateTimeField(blank=True, null=True)),
                ('estimated_departure', models.DateTimeField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('assigned_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='assigned_bays', to=settings.AUTH_USER_MODEL)),
                ('current_driver', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='occupied_bays', to='fleet.driverprofile')),
                ('current_request', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='occupied_bays', to='truck_requests.truckrequest')),
                ('current_truck', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='occupied_bays', to='fleet.truck')),
            ],
            options={
                'ordering': ['bay_number'],
                'indexes': [models.Index(fields=['status', 'is_active'], name='yard_bay_status_idx')],
                'constraints': [
                    models.CheckConstraint(
                        condition=(
                            models.Q(
                                ('status', 'occupied'),
                                models.Q(
                                    ('current_truck__isnull', False),
                                    ('current_driver__isnull', False),
                                    ('current_request__isnull', False),
                                    ('occupied_at__isnull', False),
                                ),
                            )
                            | models.Q(
                                models.Q(('status', 'occupied'), _negated=True),
                                models.Q(
                                    ('current_truck__isnull', True),
                                    ('current_driver__isnull', True),
                                    ('current_request__isnull', True),
                                    ('occupied_at__isnull', True),
                                ),
                                ('estimated_departure__isnull', True),
                            )
                        ),
                        name='loading_bay_occupant_matches_status',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='YardMovement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('movement_type', models.CharField(choices=[('entry', 'Entry'), ('queue', 'Queue'), ('bay_assigned', 'Bay Assigned'), ('loading', 'Loading'), ('departure', 'Departure')], max_length=20)),
                ('from_location', models.CharField(blank=True, max_length=255)),
                ('to_location', models.CharField(max_length=255)),
                ('notes', models.TextField(blank=True)),
                ('estimated_time', models.DateTimeField(blank=True, null=True)),
                ('actual_time', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('driver', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='yard_movements', to='fleet.driverprofile')),
                ('loading_bay', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='movements', to='yard.loadingbay')),
                ('switcher', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='yard_movements', to=settings.AUTH_USER_MODEL)),
                ('truck', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='yard_movements', to='fleet.truck')),
                ('truck_request', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='yard_movements', to='truck_requests.truckrequest')),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['truck_request', 'created_at'], name='yard_mv_request_idx'),
                    models.Index(fields=['truck', 'created_at'], name='yard_mv_truck_idx'),
                    models.Index(fields=['switcher', 'created_at'], name='yard_mv_switcher_idx'),
                    models.Index(fields=['movement_type', 'created_at'], name='yard_mv_type_idx'),
                ],
            },
        ),
    ]
