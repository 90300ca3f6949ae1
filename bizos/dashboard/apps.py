from django.apps import AppConfig


class DashboardConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'bizos.dashboard'

    def ready(self):
        """Import signals when app is ready"""
        import bizos.dashboard.signals  # noqa: F401
