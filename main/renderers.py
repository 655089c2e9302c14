from rest_framework.renderers import JSONRenderer


class EnvelopeJSONRenderer(JSONRenderer):
    """
    Wrap every API payload in ``{success, data, error?, metadata?}``.

    Views attach pagination or summary details by setting ``response.metadata``.
    """

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = (renderer_context or {}).get('response')
        if response is None:
            return super().render(data, accepted_media_type, renderer_context)

        if response.status_code == 204:
            return b''

        if response.status_code >= 400:
            envelope = {'success': False, 'data': None, 'error': data}
        else:
            envelope = {'success': True, 'data': data}
            metadata = getattr(response, 'metadata', None)
            if metadata is not None:
                envelope['metadata'] = metadata

        return super().render(envelope, accepted_media_type, renderer_context)
