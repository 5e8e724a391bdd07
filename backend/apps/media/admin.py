from django.contrib import admin

from .models import Media, MediaGrant, Video, View


class VideoInline(admin.TabularInline):
    model = Video
    extra = 0
    fields = ("location", "created_at")
    readonly_fields = ("created_at",)


class MediaGrantInline(admin.TabularInline):
    model = MediaGrant
    extra = 0
    fields = ("user", "policy", "created_at")
    readonly_fields = ("created_at",)
    raw_id_fields = ("user",)


@admin.register(Media)
class MediaAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "owner", "visibility", "created_at")
    list_filter = ("visibility",)
    search_fields = ("id", "title", "owner__email")
    raw_id_fields = ("owner",)
    inlines = [VideoInline, MediaGrantInline]


@admin.register(View)
class ViewAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "video", "created_at")
    raw_id_fields = ("user", "video")
    readonly_fields = ("created_at",)
