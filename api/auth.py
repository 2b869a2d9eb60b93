from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import Query, Request

from api.observability import ADMIN_GATE_DENIED, ADMIN_GATE_GRANTED, ADMIN_GATE_UNCONFIGURED, record_admin_gate
from core.config import get_settings
from core.errors import ConfigUnavailable, Forbidden, RegionSiteError, Unauthorized
from core.services.admin import check_secret

logger = logging.getLogger(__name__)


def require_admin(denied: type[RegionSiteError] = Forbidden) -> Callable[..., None]:
    """Dependency gating a route on the shared admin secret passed as ``?pw=``.

    ``denied`` picks the error raised on mismatch so each route keeps its
    established status code (401 for the region, 403 elsewhere). The outcome
    is recorded on the request for the access log.
    """

    def _dependency(request: Request, pw: Optional[str] = Query(default=None)) -> None:
        try:
            check_secret(pw, get_settings().admin_password, denied=denied)
        except ConfigUnavailable:
            record_admin_gate(request, ADMIN_GATE_UNCONFIGURED)
            raise
        except (Forbidden, Unauthorized):
            record_admin_gate(request, ADMIN_GATE_DENIED)
            client_ip = getattr(request.client, "host", None)
            logger.warning("admin_secret_rejected", extra={"path": request.url.path, "client_ip": client_ip or ""})
            raise
        record_admin_gate(request, ADMIN_GATE_GRANTED)

    return _dependency


require_admin_forbidden = require_admin(Forbidden)
require_admin_unauthorized = require_admin(Unauthorized)
