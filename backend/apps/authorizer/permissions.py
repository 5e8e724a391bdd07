from rest_framework import permissions

from .context import AuthorizationContext
from .guard import get_required_permissions, run_authorization


class AuthorizerPermission(permissions.BasePermission):
    """
    Проверка доступа по правилам authorizer'ов.

    - берёт требования маршрута из view.authorization;
    - строит Ability актёра и кладёт её в request.ability;
    - запускает authorize() всех authorizer'ов (они могут
      прикрепить найденный ресурс к request).
    """

    def has_permission(self, request, view):
        context = AuthorizationContext.for_request(request, view)
        required = get_required_permissions(view, context.action)
        request.ability = run_authorization(context, required)
        return True
