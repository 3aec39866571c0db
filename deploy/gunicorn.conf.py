import os

# One worker: the habit store lives in process memory, so every request for a
# user must reach the same process. Threads share the store and its locks.
bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:3000")
workers = 1
threads = int(os.environ.get("GUNICORN_THREADS", "8"))
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "30"))
worker_class = "gthread"
wsgi_app = "habittracker.wsgi:app"
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("GUNICORN_LOGLEVEL", "info")
