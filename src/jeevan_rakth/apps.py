from django.apps import AppConfig


class JeevanRakthConfig(AppConfig):
    name = "jeevan_rakth"
    verbose_name = "Jeevan Rakth orders"
    default_auto_field = "django.db.models.BigAutoField"
