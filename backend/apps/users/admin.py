from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    model = User
    list_display = (
        "email",
        "display_name",
        "role",
        "revoked",
        "confirmed_email",
        "is_staff",
        "is_active",
        "date_joined",
    )
    list_filter = (
        "role",
        "revoked",
        "confirmed_email",
        "is_staff",
        "is_superuser",
        "is_active",
    )
    ordering = ("-date_joined",)
    search_fields = ("email", "display_name", "id")

    fieldsets = (
        (None, {"fields": ("email", "password", "display_name")}),
        ("Access", {"fields": ("role", "revoked", "confirmed_email")}),
        (
            "Permissions",
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2", "display_name"),
            },
        ),
    )
