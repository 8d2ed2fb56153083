from django.apps import AppConfig


class RegisterConfig(AppConfig):
    name = 'register'
    verbose_name = 'Teams and Players'

    def ready(self):
        """
        Connect the signal handlers that keep cached course handicaps current
        """
        from . import signals  # noqa
