import logging

logger = logging.getLogger('main.requests')


class RequestLoggingMiddleware:
    """Log one line per request: method, path and response status."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        logger.info(f"{request.method} {request.get_full_path()} - {response.status_code}")
        return response
