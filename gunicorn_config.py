# gunicorn -c gunicorn_config.py app:app
# Render 등 호스팅: PORT 환경변수를 Python에서 읽어 바인딩
import os

bind = "0.0.0.0:%s" % os.environ.get("PORT", "10000")
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "60"))
accesslog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
