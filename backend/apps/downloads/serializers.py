from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from .models import Download


class DownloadCreateSerializer(serializers.Serializer):
    view_id = serializers.IntegerField(
        min_value=1,
        help_text=_("ID просмотра, из которого начинается загрузка."),
    )


class DownloadSerializer(serializers.ModelSerializer):
    download_id = serializers.UUIDField(source="location", read_only=True)
    view_id = serializers.IntegerField(read_only=True)
    source = serializers.CharField(source="view.video.location", read_only=True)
    expires_at = serializers.DateTimeField(read_only=True)

    class Meta:
        model = Download
        fields = ("download_id", "view_id", "source", "created_at", "expires_at", "downloaded_at")
        read_only_fields = fields
