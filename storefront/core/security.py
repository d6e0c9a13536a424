from __future__ import annotations

import hmac
import logging
from enum import Enum

from fastapi import Header

from storefront.core.config import settings


logger = logging.getLogger(__name__)


class ViewerRole(str, Enum):
    CUSTOMER = "customer"
    EMPLOYEE = "employee"


def resolve_viewer_role(token: str | None, valid_tokens: list[str]) -> ViewerRole:
    """Map a presented employee token to a viewer role.

    Tokens are compared in constant time. Anything that is not a
    configured token yields the customer view.
    """
    if not token:
        return ViewerRole.CUSTOMER

    for candidate in valid_tokens:
        if hmac.compare_digest(token.encode("utf-8"), candidate.encode("utf-8")):
            return ViewerRole.EMPLOYEE

    logger.warning("Unrecognized employee token presented, serving customer view")
    return ViewerRole.CUSTOMER


def get_viewer_role(
    x_employee_token: str | None = Header(default=None),
) -> ViewerRole:
    return resolve_viewer_role(x_employee_token, settings.employee_api_tokens)
