"""Item price search client.

    GET /item/search?query=<name>  → [{"id", "name", "price", "storePrice"}, ...]
"""

from __future__ import annotations

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from chat_commands.models import ItemPrice

logger = logging.getLogger(__name__)

DEFAULT_PRICE_SERVICE_URL = "https://api.runelite.net/runelite-1.6.0"

_ITEM_LIST = TypeAdapter(list[ItemPrice])


class ItemClientError(RuntimeError):
    """Raised when the price service cannot be reached or returns an error."""


class ItemClient:
    def __init__(self, base_url: str = DEFAULT_PRICE_SERVICE_URL, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def search(self, name: str) -> list[ItemPrice]:
        url = f"{self._base_url}/item/search"
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(url, params={"query": name})
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise ItemClientError(f"Cannot connect to price service at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            raise ItemClientError(f"Price service returned HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise ItemClientError(f"Price service timed out after {self._timeout}s") from e
        except httpx.TransportError as e:
            raise ItemClientError(f"Price service connection failed: {e}") from e

        try:
            items = _ITEM_LIST.validate_python(resp.json())
        except (ValueError, ValidationError) as e:
            raise ItemClientError("Unexpected response format from price service") from e
        logger.debug("item search %r → %d results", name, len(items))
        return items


def best_match(items: list[ItemPrice], original_input: str) -> ItemPrice | None:
    """Exact case-insensitive name match, else the shortest name as a guess."""
    shortest: ItemPrice | None = None
    for item in items:
        if item.name.lower() == original_input.lower():
            return item
        if shortest is None or len(item.name) < len(shortest.name):
            shortest = item
    return shortest
