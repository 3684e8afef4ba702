from django.apps import AppConfig


class CatalogConfig(AppConfig):
    name = 'catalog'
    verbose_name = 'Local Library catalog'
    default_auto_field = 'django.db.models.AutoField'
