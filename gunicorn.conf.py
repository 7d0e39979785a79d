"""
Gunicorn Configuration

Uvicorn workers under Gunicorn. Each worker holds its own in-memory metric
store, so keep API_WORKERS at 1 unless shops and metrics are reloaded per worker.
"""

import os

# Server socket
bind = os.getenv("BIND", f"0.0.0.0:{os.getenv('PORT', '8000')}")
backlog = 2048

# Worker processes
workers = int(os.getenv("API_WORKERS", 1))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
timeout = 120
keepalive = 5
graceful_timeout = 30

# Process naming
proc_name = "agency-dashboard-api"

# Logging
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
accesslog = "-"
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'
