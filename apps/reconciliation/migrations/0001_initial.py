# Generated manually for the reconciliation app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ReconciliationRun',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('started_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('finished_at', models.DateTimeField(blank=True, null=True)),
                ('total_projects', models.PositiveIntegerField(default=0)),
                ('consistent_projects', models.PositiveIntegerField(default=0)),
                ('inconsistent_projects', models.PositiveIntegerField(default=0)),
                ('total_issues', models.PositiveIntegerField(default=0)),
                ('total_corrections', models.PositiveIntegerField(default=0)),
                ('errors', models.PositiveIntegerField(default=0)),
                ('details', models.JSONField(blank=True, default=list)),
                ('triggered_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reconciliation_runs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'reconciliation_runs',
                'ordering': ['-started_at'],
            },
        ),
    ]
