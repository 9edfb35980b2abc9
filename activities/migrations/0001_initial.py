import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Activity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField()),
                ('category', models.CharField(choices=[('Academics', 'Academics'), ('Sports', 'Sports'), ('Volunteering', 'Volunteering'), ('Internships', 'Internships'), ('Skills', 'Skills'), ('Co-curricular', 'Co-curricular')], max_length=100)),
                ('date', models.DateField()),
                ('proof', models.TextField(blank=True, help_text='Link or note backing the claim', null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('verified', 'Verified'), ('rejected', 'Rejected')], db_index=True, default='pending', max_length=32)),
                ('verified_at', models.DateTimeField(blank=True, null=True)),
                ('certificate_token', models.CharField(blank=True, max_length=64, null=True, unique=True)),
                ('qr_code', models.TextField(blank=True, help_text='PNG data URL', null=True)),
                ('certificate_issued_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activities', to=settings.AUTH_USER_MODEL)),
                ('verified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='verified_activities', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'activities',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['student', 'created_at'], name='activity_student_created_idx')],
            },
        ),
    ]
