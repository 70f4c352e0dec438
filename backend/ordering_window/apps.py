from django.apps import AppConfig


class OrderingWindowConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ordering_window"
    verbose_name = "Ordering Window"
