"""
Single-page app fallback.

WhiteNoise serves the built assets straight out of ``FRONTEND_DIST``;
every other non-API GET lands here and receives ``index.html`` so the
client-side router can take over.
"""
from __future__ import annotations

from django.conf import settings
from django.http import FileResponse, JsonResponse
from django.views.decorators.http import require_safe


@require_safe
def spa_index(request, *args, **kwargs):
    index = settings.FRONTEND_DIST / 'index.html'
    if not index.is_file():
        return JsonResponse({'error': 'Frontend build not found'}, status=404)
    return FileResponse(index.open('rb'), content_type='text/html; charset=utf-8')
