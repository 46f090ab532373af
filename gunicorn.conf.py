"""
Gunicorn configuration for the Pontua API.

Env vars that override defaults:
  PORT       TCP port to bind (default: 8000)
  WORKERS    number of worker processes (default: 2)
  LOG_LEVEL  gunicorn log level (default: info)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Ranking requests are read-only and stateless, so workers scale horizontally.
workers = int(os.environ.get("WORKERS", "2"))

worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# Kill a worker that hasn't responded in 60 s.
timeout = 60

loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
