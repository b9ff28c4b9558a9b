"""
Gunicorn Configuration for the MyHome API
Run with: gunicorn -c deployment/gunicorn_config.py
"""
import multiprocessing
import os

# Application
wsgi_app = 'app:create_app("production")'

# Server Socket
bind = os.environ.get('MYHOME_BIND', '127.0.0.1:8000')
backlog = 2048

# Worker Processes: requests are short CRUD calls, sync workers are enough
workers = int(os.environ.get('MYHOME_WORKERS', multiprocessing.cpu_count() * 2 + 1))
worker_class = 'sync'
max_requests = 1000
max_requests_jitter = 50
timeout = 60
keepalive = 5

# Logging
_log_dir = os.environ.get('MYHOME_LOG_DIR', 'logs')
accesslog = os.path.join(_log_dir, 'gunicorn_access.log')
errorlog = os.path.join(_log_dir, 'gunicorn_error.log')
loglevel = 'info'
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'

proc_name = 'myhome-api'

# Item images travel inline as data URLs; keep the header limits strict
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def on_starting(server):
    os.makedirs(_log_dir, exist_ok=True)


def post_fork(server, worker):
    """Called after a worker has been forked"""
    server.log.info("Worker spawned (pid: %s)", worker.pid)
