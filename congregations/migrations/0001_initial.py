# congregations/migrations/0001_initial.py

import datetime

from django.db import migrations, models
import django.db.models.deletion

import congregations.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        # Temple first without its pastor; the Temple ↔ Pastor cycle is closed below
        migrations.CreateModel(
            name='Temple',
            fields=[
                ('id', models.CharField(default=congregations.models.new_id, editable=False, max_length=32, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('address', models.CharField(max_length=255, verbose_name='Address')),
                ('city', models.CharField(max_length=100, verbose_name='City')),
                ('region', models.CharField(max_length=100, verbose_name='Region')),
                ('country', models.CharField(max_length=100, verbose_name='Country')),
                ('founding_date', models.DateField(verbose_name='Founding date')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Temple',
                'verbose_name_plural': 'Temples',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Pastor',
            fields=[
                ('id', models.CharField(default=congregations.models.new_id, editable=False, max_length=32, primary_key=True, serialize=False)),
                ('first_name', models.CharField(max_length=100, verbose_name='First name')),
                ('last_name', models.CharField(max_length=100, verbose_name='Last name')),
                ('phone', models.CharField(max_length=20, verbose_name='Phone')),
                ('email', models.EmailField(max_length=254, verbose_name='Email')),
                ('birth_date', models.DateField(verbose_name='Birth date')),
                ('ordination_date', models.DateField(verbose_name='Ordination date')),
                ('ministerial_license', models.CharField(max_length=50, verbose_name='Ministerial license')),
                ('status', models.CharField(choices=[('ACTIVE', 'Active'), ('RETIRED', 'Retired'), ('SANCTIONED', 'Sanctioned'), ('IN_PROCESS', 'In process')], default='ACTIVE', max_length=20, verbose_name='Status')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('temple', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='assigned_pastor', to='congregations.temple', verbose_name='Temple')),
            ],
            options={
                'verbose_name': 'Pastor',
                'verbose_name_plural': 'Pastors',
                'ordering': ['last_name', 'first_name'],
                'indexes': [models.Index(fields=['status'], name='pastor_status_idx')],
            },
        ),
        migrations.AddField(
            model_name='temple',
            name='principal_pastor',
            field=models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='led_temple', to='congregations.pastor', verbose_name='Principal pastor'),
        ),
        migrations.CreateModel(
            name='Member',
            fields=[
                ('id', models.CharField(default=congregations.models.new_id, editable=False, max_length=32, primary_key=True, serialize=False)),
                ('first_names', models.CharField(max_length=150, verbose_name='First names')),
                ('last_names', models.CharField(max_length=150, verbose_name='Last names')),
                ('email', models.EmailField(max_length=254, verbose_name='Email')),
                ('phone', models.CharField(blank=True, max_length=20, verbose_name='Phone')),
                ('birth_date', models.DateField(verbose_name='Birth date')),
                ('status', models.CharField(choices=[('SERVER', 'Server'), ('BAPTIZED', 'Baptized'), ('SYMPATHIZER', 'Sympathizer'), ('UNAFFILIATED', 'Unaffiliated')], default='UNAFFILIATED', max_length=20, verbose_name='Status')),
                ('active', models.BooleanField(default=True, verbose_name='Active')),
                ('registration_date', models.DateField(default=datetime.date.today, verbose_name='Registration date')),
                ('baptism_date', models.DateField(blank=True, null=True, verbose_name='Baptism date')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('temple', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='members', to='congregations.temple', verbose_name='Temple')),
            ],
            options={
                'verbose_name': 'Member',
                'verbose_name_plural': 'Members',
                'ordering': ['last_names', 'first_names'],
                'indexes': [
                    models.Index(fields=['status'], name='member_status_idx'),
                    models.Index(fields=['active'], name='member_active_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Committee',
            fields=[
                ('id', models.CharField(default=congregations.models.new_id, editable=False, max_length=32, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('creation_date', models.DateField(default=datetime.date.today, verbose_name='Creation date')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('leader', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='led_committees', to='congregations.member', verbose_name='Leader')),
                ('temple', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='committees', to='congregations.temple', verbose_name='Temple')),
            ],
            options={
                'verbose_name': 'Committee',
                'verbose_name_plural': 'Committees',
                'ordering': ['name'],
            },
        ),
    ]
