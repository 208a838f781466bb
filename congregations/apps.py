from django.apps import AppConfig


class CongregationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name               = "congregations"
    verbose_name       = "Congregations"

    def ready(self):
        # Register signal handlers
        import congregations.signals  # noqa: F401
