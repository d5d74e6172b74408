# gunicorn_config.py
# gunicorn -c gunicorn_config.py "homeclean:create_app()"

import multiprocessing
import os
from homeclean.settings import load_settings

try:
    settings = load_settings()
    PORT = int(settings.get("PORT", os.getenv("PORT", 3000)))
    CONFIG_NAME = settings.get("CONFIG_NAME", os.getenv("CONFIG_NAME"))
except Exception:
    PORT = int(os.getenv("PORT", 3000))
    CONFIG_NAME = os.getenv("CONFIG_NAME")

bind = f"0.0.0.0:{PORT}"
workers = multiprocessing.cpu_count() * 2 + 1
worker_class = "gthread"      # each worker keeps its notifier thread alive between requests
threads = 4
timeout = 60
keepalive = 5
errorlog = "-"
accesslog = "-"
loglevel = "info"

reload = CONFIG_NAME == "dev"
