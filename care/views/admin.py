"""
Administrative aggregate endpoint.

Only callers whose token carries the ``admin`` role may read it; anyone
else gets a bare 403.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..permissions import IsAdminRole
from ..services.stats import system_counts


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_stats(request):
    """Total accounts and total appointments, as ``{"users": {"count"}, "appointments": {"count"}}``."""
    return Response(system_counts())
