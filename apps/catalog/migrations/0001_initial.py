import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('users', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Service',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('category', models.CharField(max_length=100)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('description', models.TextField()),
                ('service_location', models.CharField(max_length=200)),
                ('available_days', models.JSONField(default=dict)),
                ('start_time', models.TimeField()),
                ('end_time', models.TimeField()),
                ('estimated_completion_time', models.CharField(blank=True, default='', max_length=100)),
                ('pricing_type', models.CharField(choices=[('fixed', 'Fixed'), ('hourly', 'Hourly')], default='fixed', max_length=20)),
                ('price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('contact_number', models.CharField(max_length=20)),
                ('is_available', models.BooleanField(default=True)),
                ('image', models.URLField(blank=True, max_length=500, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('housekeeper', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='services', to='users.housekeeper')),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),
    ]
