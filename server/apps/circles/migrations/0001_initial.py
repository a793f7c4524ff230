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
            name='Circle',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('is_public', models.BooleanField(default=True)),
                ('invitation_code', models.CharField(blank=True, help_text='Set only for private circles', max_length=64, null=True, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('creator', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='created_circles', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Circle',
                'verbose_name_plural': 'Circles',
                'ordering': ['-updated_at'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(models.Q(('invitation_code__isnull', True), ('is_public', True)), models.Q(('invitation_code__isnull', False), ('is_public', False)), _connector='OR'), name='circles_invitation_code_iff_private'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Folder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('circle', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='folders', to='circles.circle')),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='created_folders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Folder',
                'verbose_name_plural': 'Folders',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('filename', models.CharField(max_length=500)),
                ('file_key', models.CharField(help_text='Object key in storage', max_length=500)),
                ('file_url', models.TextField(help_text='Public URL of the stored object')),
                ('mime_type', models.CharField(max_length=100)),
                ('file_size', models.BigIntegerField(help_text='File size in bytes as reported by the client')),
                ('file_type', models.CharField(choices=[('video', 'Video'), ('audio', 'Audio'), ('image', 'Image')], db_index=True, max_length=32)),
                ('is_paid', models.BooleanField(default=False)),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('uploaded_at', models.DateTimeField(auto_now_add=True)),
                ('circle', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='circles.circle')),
                ('folder', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='files', to='circles.folder')),
                ('uploader', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='uploaded_files', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'ordering': ['-uploaded_at'],
                'indexes': [
                    models.Index(fields=['circle', '-uploaded_at'], name='files_circle_recent_idx'),
                    models.Index(fields=['uploader', '-uploaded_at'], name='files_uploader_recent_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='CircleMember',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('owner', 'Owner'), ('member', 'Member')], default='member', max_length=32)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('circle', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='members', to='circles.circle')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='memberships', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Circle Member',
                'verbose_name_plural': 'Circle Members',
                'ordering': ['-joined_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('circle', 'user'), name='circle_members_unique_membership'),
                    models.UniqueConstraint(condition=models.Q(('role', 'owner')), fields=('circle',), name='circle_members_single_owner'),
                ],
            },
        ),
        migrations.CreateModel(
            name='FileShareLink',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('token', models.CharField(max_length=64, unique=True)),
                ('expires_at', models.DateTimeField(blank=True, db_index=True, help_text='Checked when the link is read; empty means never', null=True)),
                ('download_count', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='share_links', to=settings.AUTH_USER_MODEL)),
                ('file', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='share_links', to='circles.file')),
            ],
            options={
                'verbose_name': 'File Share Link',
                'verbose_name_plural': 'File Share Links',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='CircleActivityLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('member_joined', 'Member joined'), ('member_left', 'Member left'), ('member_removed', 'Member removed'), ('file_uploaded', 'File uploaded'), ('file_deleted', 'File deleted'), ('folder_created', 'Folder created'), ('folder_deleted', 'Folder deleted'), ('circle_updated', 'Circle updated')], max_length=32)),
                ('target_id', models.BigIntegerField(blank=True, null=True)),
                ('target_type', models.CharField(blank=True, default='', max_length=32)),
                ('details', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('circle', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activity', to='circles.circle')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='circle_activity', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Circle Activity',
                'verbose_name_plural': 'Circle Activity',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['circle', '-created_at'], name='activity_circle_recent_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='CircleCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('category', models.CharField(db_index=True, max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('circle', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='categories', to='circles.circle')),
            ],
            options={
                'verbose_name': 'Circle Category',
                'verbose_name_plural': 'Circle Categories',
                'ordering': ['category'],
                'constraints': [
                    models.UniqueConstraint(fields=('circle', 'category'), name='circle_categories_unique'),
                ],
            },
        ),
    ]
