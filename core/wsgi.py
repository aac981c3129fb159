"""WSGI entry point for the marketplace API."""
from django.core.wsgi import get_wsgi_application

from core.settings import configure_settings_module

configure_settings_module()

application = get_wsgi_application()
