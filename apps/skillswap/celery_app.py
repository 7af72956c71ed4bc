import logging

from skillswap.core.celery import create_celery_app
from skillswap.core.logging import setup_logging

setup_logging()

# Worker/beat entrypoint: `celery -A skillswap.celery_app worker -B`
app = create_celery_app()

logging.getLogger(__name__).info("Celery app initialized")
