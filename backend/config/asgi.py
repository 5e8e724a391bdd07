import logging
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
logger = logging.getLogger('config.asgi')

# инициализируем Django до импорта консьюмеров и моделей
django_asgi_app = get_asgi_application()


def get_application():
    from apps.downloads.routing import \
        websocket_urlpatterns as downloads_urlpatterns
    from channels.routing import ProtocolTypeRouter, URLRouter
    from config.channels_jwt import JwtAuthMiddlewareStack

    logger.info("ASGI приложение собрано: http + websocket.")
    return ProtocolTypeRouter({
        'http': django_asgi_app,
        'websocket': JwtAuthMiddlewareStack(
            URLRouter(downloads_urlpatterns)
        ),
    })


application = get_application()
