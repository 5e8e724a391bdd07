import uuid

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
            name="Media",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, verbose_name="ID медиа")),
                ("title", models.CharField(max_length=255, verbose_name="Название")),
                ("visibility", models.CharField(choices=[("private", "Только владелец"), ("auth", "Все авторизованные пользователи"), ("public", "Доступен всем")], db_index=True, default="auth", max_length=16, verbose_name="Уровень доступа")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Создано")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Обновлено")),
                ("owner", models.ForeignKey(blank=True, help_text="Пользователь, добавивший медиа. Может быть пустым для каталога.", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="media", to=settings.AUTH_USER_MODEL, verbose_name="Владелец")),
            ],
            options={
                "verbose_name": "Медиа",
                "verbose_name_plural": "Медиа",
                "ordering": ("title",),
            },
        ),
        migrations.CreateModel(
            name="Video",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("location", models.CharField(help_text="Ключ (путь) исходного файла видео в хранилище.", max_length=1024, verbose_name="Путь к источнику")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Создано")),
                ("media", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="videos", to="media.media", verbose_name="Медиа")),
            ],
            options={
                "verbose_name": "Видео",
                "verbose_name_plural": "Видео",
            },
        ),
        migrations.CreateModel(
            name="View",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="Создано")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="views", to=settings.AUTH_USER_MODEL, verbose_name="Пользователь")),
                ("video", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="views", to="media.video", verbose_name="Видео")),
            ],
            options={
                "verbose_name": "Просмотр",
                "verbose_name_plural": "Просмотры",
                "ordering": ("-created_at",),
            },
        ),
        migrations.CreateModel(
            name="MediaGrant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("policy", models.CharField(choices=[("read", "Просмотр"), ("write", "Изменение"), ("delete", "Удаление")], default="read", max_length=16, verbose_name="Право")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Создано")),
                ("media", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="grants", to="media.media", verbose_name="Медиа")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="media_grants", to=settings.AUTH_USER_MODEL, verbose_name="Пользователь")),
            ],
            options={
                "verbose_name": "Доступ к медиа",
                "verbose_name_plural": "Доступы к медиа",
                "unique_together": {("media", "user", "policy")},
            },
        ),
    ]
