from django.apps import AppConfig


class RegistrationAppConfig(AppConfig):
    default_auto_field = "django.db.models.AutoField"
    name = "obozy.apps.registration"
    label = "registration"
    verbose_name = "Zgłoszenia"
