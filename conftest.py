import pytest

from hotel_management_service.celery import app as celery_app


@pytest.fixture(autouse=True)
def eager_celery():
    """Run queued tasks in-process so no broker is needed."""
    celery_app.conf.task_always_eager = True
    celery_app.conf.task_eager_propagates = False
    yield
    celery_app.conf.task_always_eager = False
