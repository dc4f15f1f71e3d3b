import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('fleet', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='TruckRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('load_id', models.CharField(max_length=64)),
                ('load_description', models.TextField()),
                ('estimated_weight', models.PositiveIntegerField(blank=True, help_text='Estimated weight in kilograms', null=True)),
                ('priority', models.CharField(choices=[('low', 'Low'), ('normal', 'Normal'), ('high', 'High'), ('urgent', 'Urgent')], default='normal', max_length=10)),
                ('pickup_location', models.CharField(max_length=255)),
                ('delivery_location', models.CharField(max_length=255)),
                ('requested_time', models.DateTimeField(default=django.utils.timezone.now)),
                ('required_time', models.DateTimeField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('assigned', 'Assigned'), ('in_progress', 'In Progress'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('assigned_at', models.DateTimeField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('assigned_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='assigned_truck_requests', to=settings.AUTH_USER_MODEL)),
                ('assigned_driver', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='truck_requests', to='fleet.driverprofile')),
                ('assigned_truck', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='truck_requests', to='fleet.truck')),
                ('requester', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='truck_requests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['status'], name='truck_req_status_idx'),
                    models.Index(fields=['requester', 'status'], name='truck_req_requester_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(
                        condition=(
                            models.Q(
                                ('status__in', ('assigned', 'in_progress', 'completed')),
                                models.Q(
                                    ('assigned_truck__isnull', False),
                                    ('assigned_driver__isnull', False),
                                    ('assigned_at__isnull', False),
                                    ('assigned_by__isnull', False),
                                ),
                            )
                            | models.Q(
                                ('status__in', ('pending', 'cancelled')),
                                models.Q(
                                    ('assigned_truck__isnull', True),
                                    ('assigned_driver__isnull', True),
                                    ('assigned_at__isnull', True),
                                    ('assigned_by__isnull', True),
                                ),
                            )
                        ),
                        name='truck_request_assignment_matches_status',
                    ),
                ],
            },
        ),
    ]
