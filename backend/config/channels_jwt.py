import logging
import urllib.parse

from channels.auth import AuthMiddlewareStack
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.utils.functional import cached_property

logger = logging.getLogger(__name__)


class JwtAuthMiddleware(BaseMiddleware):
    """
    Middleware для аутентификации WebSocket-подключений по JWT.

    Токен ищем:
    - в querystring: ?token=<access_token>;
    - в заголовке Authorization: Bearer <access_token>.
    Невалидный токен -> AnonymousUser, решение принимает консьюмер.
    """

    @cached_property
    def jwt_auth(self):
        from rest_framework_simplejwt.authentication import JWTAuthentication

        return JWTAuthentication()

    @cached_property
    def anonymous_user_class(self):
        from django.contrib.auth.models import AnonymousUser

        return AnonymousUser

    @staticmethod
    def get_raw_token(scope) -> str | None:
        query_string = scope.get("query_string", b"").decode()
        token = urllib.parse.parse_qs(query_string).get("token", [None])[0]
        if token:
            return token

        for name, value in scope.get("headers") or []:
            if name.lower() != b"authorization":
                continue
            parts = value.decode().split()
            if len(parts) == 2 and parts[0] == "Bearer":
                return parts[1]
        return None

    async def __call__(self, scope, receive, send):
        token = self.get_raw_token(scope)

        if not token:
            scope["user"] = self.anonymous_user_class()
            return await super().__call__(scope, receive, send)

        try:
            validated_token = self.jwt_auth.get_validated_token(token)
            user = await database_sync_to_async(self.jwt_auth.get_user)(
                validated_token
            )
            scope["user"] = user
        except Exception as exc:
            logger.info("WebSocket JWT отклонён: %s", exc)
            scope["user"] = self.anonymous_user_class()

        return await super().__call__(scope, receive, send)


def JwtAuthMiddlewareStack(inner):
    """
    Оборачиваем стандартный AuthMiddlewareStack, чтобы сессии тоже продолжали работать.
    """
    return JwtAuthMiddleware(AuthMiddlewareStack(inner))
