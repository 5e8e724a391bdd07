from django.contrib.auth import get_user_model
from rest_framework import serializers

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Публичное представление пользователя для API.
    Без чувствительных полей, только то, что можно показывать наружу.
    """

    class Meta:
        model = User
        fields = ("id", "email", "display_name", "role", "confirmed_email")
        read_only_fields = fields
