"""
Development proxy for the SPA asset server.

When ``FRONTEND_DEV_SERVER`` is set (e.g. ``http://localhost:5173``)
every request outside the backend's own paths is forwarded there, so
the browser can load the app and the API from one origin.
"""
import logging

import requests
from django.conf import settings
from django.http import HttpResponse, JsonResponse

logger = logging.getLogger(__name__)

HOP_BY_HOP = {
    'connection', 'keep-alive', 'proxy-authenticate', 'proxy-authorization',
    'te', 'trailers', 'transfer-encoding', 'upgrade', 'content-encoding', 'content-length',
}


class DevServerProxyMiddleware:
    BACKEND_PREFIXES = ('/api/', '/healthz', '/metrics', '/swagger/', '/redoc/', '/static/')

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        target = getattr(settings, 'FRONTEND_DEV_SERVER', '')
        path = request.path or '/'
        if not target or any(path.startswith(p) for p in self.BACKEND_PREFIXES):
            return self.get_response(request)
        return self.forward(request, target)

    def forward(self, request, target: str):
        url = f"{target}{request.get_full_path()}"
        headers = {k: v for k, v in request.headers.items() if k.lower() not in HOP_BY_HOP and k.lower() != 'host'}
        try:
            r = requests.request(
                request.method,
                url,
                headers=headers,
                data=request.body or None,
                timeout=settings.FRONTEND_PROXY_TIMEOUT,
                allow_redirects=False,
            )
        except requests.RequestException as e:
            logger.warning('Dev server %s unreachable: %s', target, e)
            return JsonResponse({'error': 'Dev server unavailable'}, status=502)
        resp = HttpResponse(r.content, status=r.status_code,
                            content_type=r.headers.get('Content-Type', 'application/octet-stream'))
        for k, v in r.headers.items():
            if k.lower() not in HOP_BY_HOP and k.lower() != 'content-type':
                resp[k] = v
        return resp
