"""Production entry point: serve the notification API under Gunicorn.

Used by the container image and the ``notification-service`` console script.
RQ workers are started separately with ``python manage.py rqworker default``.
"""

import os
import sys

from gunicorn.app.wsgiapp import run

WSGI_APP = "mealplan_notifications.wsgi:application"


def gunicorn_argv() -> list[str]:
    """Build the Gunicorn command line from the environment.

    - GUNICORN_BIND (default 0.0.0.0:8000)
    - GUNICORN_WORKERS (default 4)
    - GUNICORN_THREADS (default 2); push fan-out adds its own pool per worker
    - GUNICORN_TIMEOUT (default 60 seconds)

    Access and error logs go to stdout/stderr for container log collection.
    """
    return [
        "gunicorn",
        WSGI_APP,
        "--bind",
        os.getenv("GUNICORN_BIND", "0.0.0.0:8000"),
        "--workers",
        os.getenv("GUNICORN_WORKERS", "4"),
        "--threads",
        os.getenv("GUNICORN_THREADS", "2"),
        "--timeout",
        os.getenv("GUNICORN_TIMEOUT", "60"),
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]


def main():
    sys.argv = gunicorn_argv()
    run()


if __name__ == "__main__":
    main()
