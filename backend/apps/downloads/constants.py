from datetime import timedelta

from django.conf import settings

SUBJECT = "Download"

# Сколько времени после создания загрузка остаётся доступной
DEFAULT_GRACE_PERIOD = timedelta(hours=2)


def get_grace_period() -> timedelta:
    return getattr(settings, "DOWNLOADS_GRACE_PERIOD", DEFAULT_GRACE_PERIOD)
