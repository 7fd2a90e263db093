"""
Production Server Configuration

Gunicorn with Uvicorn workers. Every worker runs the application lifespan and
so loads its own copy of the sales record store.
"""

import multiprocessing
import os

# Server socket
bind = os.getenv("BIND", f"0.0.0.0:{os.getenv('API_PORT', '5000')}")
backlog = 1024

# Worker processes
workers = int(os.getenv("API_WORKERS", min(multiprocessing.cpu_count() + 1, 8)))
worker_class = "uvicorn.workers.UvicornWorker"
max_requests = 5000
max_requests_jitter = 500
# Loading a large CSV happens before a worker accepts requests
timeout = int(os.getenv("GUNICORN_TIMEOUT", 180))
graceful_timeout = 30
keepalive = 5

proc_name = "retail-sales-api"

# Logging
errorlog = "-"
accesslog = "-" if os.getenv("ACCESS_LOG", "false").lower() == "true" else None
loglevel = os.getenv("LOG_LEVEL", "info").lower()


def when_ready(server):
    server.log.info("Retail sales API master ready, spawning %s workers", workers)


def worker_abort(worker):
    worker.log.warning("Worker %s aborted (timeout while loading or serving)", worker.pid)
