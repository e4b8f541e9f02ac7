# store/apps.py
from django.apps import AppConfig


class StoreAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "store"

    def ready(self):
        import store.signals  # noqa: F401
