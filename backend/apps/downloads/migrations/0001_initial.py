import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("media", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Download",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("location", models.UUIDField(default=uuid.uuid4, editable=False, unique=True, verbose_name="Идентификатор загрузки")),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name="Создано")),
                ("downloaded_at", models.DateTimeField(blank=True, help_text="Когда клиент подтвердил завершение скачивания.", null=True, verbose_name="Скачано")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="downloads", to=settings.AUTH_USER_MODEL, verbose_name="Владелец")),
                ("view", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="downloads", to="media.view", verbose_name="Просмотр")),
            ],
            options={
                "verbose_name": "Загрузка",
                "verbose_name_plural": "Загрузки",
                "ordering": ("-created_at",),
            },
        ),
    ]
