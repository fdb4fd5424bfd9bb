"""
Prometheus metrics for the gallery admin API

Request latency per endpoint plus business counters for access code
consumption, admin registration and click ingestion.
"""
import time
from flask import request, g
from prometheus_client import Counter, Histogram, generate_latest
from prometheus_client.core import REGISTRY

REQUEST_COUNT = Counter(
    'gallery_http_requests_total',
    'HTTP requests by endpoint and status',
    ['method', 'endpoint', 'status_code']
)

REQUEST_DURATION = Histogram(
    'gallery_http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

ACCESS_CODE_CONSUMPTIONS = Counter(
    'access_code_consumptions_total',
    'Access code consumption attempts',
    ['outcome']
)

ADMIN_REGISTRATIONS = Counter(
    'admin_registrations_total',
    'Admin registration attempts',
    ['outcome']
)

CLICKS_LOGGED = Counter(
    'clicks_logged_total',
    'Guest click events stored'
)


class MetricsService:
    """Hooks request timing into a Flask app and exposes business counters"""

    def __init__(self, app=None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.app = app
        app.before_request(self._start_timer)
        app.after_request(self._record_request)

    @staticmethod
    def _start_timer():
        g.metrics_started = time.perf_counter()

    def _record_request(self, response):
        started = g.pop('metrics_started', None)
        if started is None:
            return response

        endpoint = request.endpoint or 'unknown'
        try:
            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=endpoint,
                status_code=str(response.status_code)
            ).inc()
            REQUEST_DURATION.labels(
                method=request.method,
                endpoint=endpoint
            ).observe(time.perf_counter() - started)
        except ValueError as e:
            self.app.logger.error(f"Error recording request metrics: {e}")

        return response

    @staticmethod
    def track_access_code_consumption(outcome):
        """Count a consume attempt by outcome (success, not_found, inactive, ...)"""
        ACCESS_CODE_CONSUMPTIONS.labels(outcome=outcome).inc()

    @staticmethod
    def track_registration(outcome):
        ADMIN_REGISTRATIONS.labels(outcome=outcome).inc()

    @staticmethod
    def track_click():
        CLICKS_LOGGED.inc()


def metrics_endpoint():
    """Prometheus text exposition of every registered metric"""
    return generate_latest(REGISTRY)


metrics_service = MetricsService()
