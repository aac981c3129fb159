"""ASGI entry point. The API is plain request/response, no websocket routing."""
from django.core.asgi import get_asgi_application

from core.settings import configure_settings_module

configure_settings_module()

application = get_asgi_application()
