"""Public IP lookup.

Purely cosmetic: any failure is logged and ignored.
"""

import logging

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class IpInfo(BaseModel):
    """Response of the lookup service."""

    ip: str


async def lookup_public_ip(http: httpx.AsyncClient, url: str) -> str | None:
    """Fetch the caller's public IP address.

    Returns:
        The address, or None if the lookup failed for any reason
    """
    try:
        response = await http.get(url)
        response.raise_for_status()
        return IpInfo.model_validate(response.json()).ip
    # ValueError covers bad JSON and pydantic ValidationError
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Public IP lookup failed: {e}")
        return None
