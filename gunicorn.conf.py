# Gunicorn configuration for AutoStudio
# Handles long-running article generation requests

# Worker settings
# Studio state (articles, trend snapshot, auto-refresh job) lives in process
workers = 1
worker_class = 'gthread'
threads = 4

# Timeout settings - draft + audit + image can take several minutes
timeout = 300
graceful_timeout = 60
keepalive = 5

# Logging
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Request handling
max_requests = 1000
max_requests_jitter = 50

# Bind
bind = '0.0.0.0:5000'
