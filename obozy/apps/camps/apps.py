from django.apps import AppConfig


class CampsConfig(AppConfig):
    default_auto_field = "django.db.models.AutoField"
    name = "obozy.apps.camps"
    label = "camps"
    verbose_name = "Obozy"

    def ready(self):
        import obozy.apps.camps.signals  # noqa: F401
