import logging
from typing import Any, Optional

logger = logging.getLogger('care.audit')


def log_action(*, user: Optional[Any], action: str, object_type: Optional[str] = None,
               object_id: Optional[int] = None, detail: Optional[dict[str, Any]] = None) -> str:
    """Emit one audit line.  Callers must never pass passwords or tokens in ``detail``."""
    parts = [f'action={action}', f"user={getattr(user, 'id', None) or '-'}"]
    if object_type:
        parts.append(f'object={object_type}:{object_id if object_id is not None else "-"}')
    for key, value in sorted((detail or {}).items()):
        parts.append(f'{key}={value}')
    line = ' '.join(parts)
    logger.info(line)
    return line
