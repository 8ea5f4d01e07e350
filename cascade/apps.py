from django.apps import AppConfig
import logging


logger = logging.getLogger(__name__)


class CascadeConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cascade'

    def ready(self):
        logger.debug("CascadeConfig.ready() called")
