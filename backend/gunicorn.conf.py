"""Gunicorn settings for serving ``croctop:create_app()``."""

import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs go to stdout/stderr; the app emits JSON lines on its own
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust forwarded headers from the reverse proxy (see USE_PROXYFIX)
forwarded_allow_ips = "*"
proxy_protocol = False

wsgi_app = "croctop:create_app()"
