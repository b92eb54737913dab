"""
Prometheus metrics definitions for the API.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Submission metrics
dreams_submitted_total = Counter(
    'dreams_submitted_total',
    'Total accepted dream submissions',
    ['mode', 'identity']
)

quota_rejections_total = Counter(
    'quota_rejections_total',
    'Total submissions rejected for exhausted quota',
    ['identity']
)

store_failures_total = Counter(
    'store_failures_total',
    'Total failed store operations',
    ['operation']
)
