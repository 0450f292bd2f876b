from django.apps import AppConfig


class DmessagesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'dmessages'
    verbose_name = 'Messages'
