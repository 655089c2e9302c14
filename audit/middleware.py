"""
Audit trail middleware.

For every successful POST/PUT/PATCH/DELETE under the API prefix a record is
handed to the ``record_audit_log`` Celery task once the response is built.
Nothing on this path may fail or delay the response beyond the snapshot read.
"""
import json
import logging

from django.conf import settings

from .snapshots import capture_snapshot
from .tasks import record_audit_log

logger = logging.getLogger(__name__)

WRITE_METHODS = ('POST', 'PUT', 'PATCH', 'DELETE')
SNAPSHOT_METHODS = ('PUT', 'PATCH', 'DELETE')


def entity_from_path(path):
    """First path segment after the API prefix, e.g. /api/products/1/ -> products"""
    prefix = settings.AUDIT_API_PREFIX
    if not path.startswith(prefix):
        return None
    segment = path[len(prefix):].split('/', 1)[0]
    return segment or None


def parse_body(request):
    """Request body as a dict, or None when it is empty or not JSON/form data."""
    content_type = request.content_type or ''

    if content_type == 'application/json':
        if not request.body:
            return None
        try:
            body = json.loads(request.body)
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

    if request.method == 'POST' and content_type in ('multipart/form-data', 'application/x-www-form-urlencoded'):
        return {key: value for key, value in request.POST.items()}

    return None


def entity_id_from(body, view_kwargs):
    body_id = body.get('id') if isinstance(body, dict) else None
    if isinstance(body_id, (str, int, float)) and not isinstance(body_id, bool):
        return str(body_id)

    route_id = view_kwargs.get('id') or view_kwargs.get('pk')
    return str(route_id) if route_id else None


def client_ip(request):
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


class AuditMiddleware:

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        record = getattr(request, '_audit_record', None)
        if record is not None and response.status_code < 400:
            self.dispatch(request, record)

        return response

    def process_view(self, request, view_func, view_args, view_kwargs):
        if request.method not in WRITE_METHODS:
            return None

        entity = entity_from_path(request.path)
        if entity is None:
            return None

        body = parse_body(request)
        entity_id = entity_id_from(body, view_kwargs)

        previous_data = None
        if request.method in SNAPSHOT_METHODS and entity_id:
            previous_data = capture_snapshot(entity, entity_id)

        request._audit_record = {
            'action': request.method,
            'entity': entity,
            'entity_id': entity_id,
            'payload': body or None,
            'previous_data': previous_data,
        }
        return None

    def dispatch(self, request, record):
        # DRF copies the authenticated user onto the Django request
        user = getattr(request, 'user', None)
        user_id = str(user.pk) if user is not None and user.is_authenticated else None

        try:
            record_audit_log.delay(
                user_id=user_id,
                ip=client_ip(request),
                user_agent=request.META.get('HTTP_USER_AGENT'),
                **record
            )
        except Exception as e:
            logger.error(f"Audit log dispatch failed for {record['action']} {record['entity']}: {e}")
