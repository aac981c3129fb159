import os


def configure_settings_module():
    """
    Point ``DJANGO_SETTINGS_MODULE`` at development or production settings,
    depending on ``DEBUG`` in the environment. An explicit value wins, which
    is how the test settings get picked up.
    """
    from .base import DEBUG

    os.environ.setdefault(
        'DJANGO_SETTINGS_MODULE',
        'core.settings.development' if DEBUG else 'core.settings.production',
    )
