from celery import Celery, Task
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def init_celery(app):
    """Bind a Celery app to the Flask app so tasks run inside its app context"""

    class ContextTask(Task):
        def __call__(self, *args, **kwargs):
            with app.app_context():
                return self.run(*args, **kwargs)

    celery = Celery(app.import_name, task_cls=ContextTask)
    celery.conf.update(
        broker_url=app.config["CELERY_BROKER_URL"],
        result_backend=app.config["CELERY_RESULT_BACKEND"],
        task_always_eager=app.config["CELERY_TASK_ALWAYS_EAGER"],
        task_ignore_result=True,
    )
    celery.set_default()
    app.extensions["celery"] = celery
    return celery
