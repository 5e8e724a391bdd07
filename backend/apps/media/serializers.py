from rest_framework import serializers

from .models import Media, Video


class VideoSerializer(serializers.ModelSerializer):
    class Meta:
        model = Video
        fields = ("id", "location", "created_at")
        read_only_fields = fields


class MediaSerializer(serializers.ModelSerializer):
    videos = VideoSerializer(many=True, read_only=True)

    class Meta:
        model = Media
        fields = ("id", "title", "visibility", "videos", "created_at", "updated_at")
        read_only_fields = fields
