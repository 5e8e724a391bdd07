from django.contrib import admin

from .models import Download


@admin.register(Download)
class DownloadAdmin(admin.ModelAdmin):
    list_display = ("location", "user", "view", "created_at", "downloaded_at")
    list_filter = ("downloaded_at",)
    search_fields = ("location", "user__email")
    raw_id_fields = ("user", "view")
    readonly_fields = ("location", "created_at")
