import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('callers', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Call',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('topic', models.CharField(max_length=200)),
                ('screener_notes', models.TextField(blank=True, default='')),
                ('talking_points', models.TextField(blank=True, default='')),
                ('priority', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High')], default='medium', max_length=16)),
                ('screener_name', models.CharField(max_length=100)),
                ('call_status', models.CharField(choices=[('waiting', 'Waiting'), ('ready', 'Ready'), ('on_air', 'On Air'), ('completed', 'Completed'), ('dropped', 'Dropped')], default='waiting', max_length=16)),
                ('version', models.PositiveIntegerField(default=1)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('caller', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='calls', to='callers.caller')),
            ],
            options={
                'db_table': 'calls',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['call_status', 'created_at'], name='calls_status_created_idx')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('call_status', 'on_air')), fields=('call_status',), name='calls_single_on_air')],
            },
        ),
    ]
