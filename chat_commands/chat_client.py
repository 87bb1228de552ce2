"""Chat statistics service client.

The service keeps the stats players choose to share, keyed by player name:

    GET  /chat/kc?name=&boss=               → int
    POST /chat/kc?name=&boss=&kc=
    GET  /chat/pb?name=&boss=               → int (seconds)
    POST /chat/pb?name=&boss=&pb=
    GET  /chat/qp?name=                     → int
    POST /chat/qp?name=&qp=
    GET  /chat/gc?name=                     → int
    POST /chat/gc?name=&gc=
    GET  /chat/duels?name=                  → {"wins", "losses", "winningStreak", "losingStreak"}
    POST /chat/duels?name=&wins=&losses=&winningStreak=&losingStreak=
    GET  /chat/pks?name=                    → {"kills", "deaths", "killsBounty", ...}
    POST /chat/pks?name=&kills=&deaths=&killsBounty=&deathsBounty=&killsPvp=&deathsPvp=

Every method raises ChatClientError on transport failures, timeouts, non-2xx
responses and bodies that do not parse.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from chat_commands.models import Duels, PlayerKills

logger = logging.getLogger(__name__)

DEFAULT_CHAT_SERVICE_URL = "https://api.runelite.net/runelite-1.6.0"


class ChatClientError(RuntimeError):
    """Raised when the chat service cannot be reached or returns an error."""


class ChatClient:
    """Async HTTP client for the chat statistics service.

    Args:
        base_url: Service root, e.g. "https://api.runelite.net/runelite-1.6.0".
        timeout:  HTTP timeout in seconds. Defaults to 10.
    """

    def __init__(self, base_url: str = DEFAULT_CHAT_SERVICE_URL, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _request(self, method: str, path: str, params: dict[str, Any]) -> httpx.Response:
        url = f"{self._base_url}/chat/{path}"
        logger.debug("chat %s %s params=%s", method, url, params)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                if method == "POST":
                    resp = await client.post(url, params=params)
                else:
                    resp = await client.get(url, params=params)
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise ChatClientError(f"Cannot connect to chat service at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            raise ChatClientError(f"Chat service returned HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise ChatClientError(f"Chat service timed out after {self._timeout}s") from e
        except httpx.TransportError as e:
            raise ChatClientError(f"Chat service connection failed: {e}") from e
        return resp

    async def _get_int(self, path: str, params: dict[str, Any]) -> int:
        resp = await self._request("GET", path, params)
        try:
            return int(resp.json())
        except (ValueError, TypeError) as e:
            raise ChatClientError(f"Unexpected /chat/{path} response: {resp.text!r}") from e

    async def _get_model(self, path: str, params: dict[str, Any], model: type) -> Any:
        resp = await self._request("GET", path, params)
        try:
            return model.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise ChatClientError(f"Unexpected /chat/{path} response: {resp.text!r}") from e

    # ------------------------------------------------------------------
    # Kill count / personal best
    # ------------------------------------------------------------------

    async def get_kc(self, name: str, boss: str) -> int:
        return await self._get_int("kc", {"name": name, "boss": boss})

    async def submit_kc(self, name: str, boss: str, kc: int) -> None:
        await self._request("POST", "kc", {"name": name, "boss": boss, "kc": kc})

    async def get_pb(self, name: str, boss: str) -> int:
        return await self._get_int("pb", {"name": name, "boss": boss})

    async def submit_pb(self, name: str, boss: str, pb: int) -> None:
        await self._request("POST", "pb", {"name": name, "boss": boss, "pb": pb})

    # ------------------------------------------------------------------
    # Quest points / gamble count
    # ------------------------------------------------------------------

    async def get_qp(self, name: str) -> int:
        return await self._get_int("qp", {"name": name})

    async def submit_qp(self, name: str, qp: int) -> None:
        await self._request("POST", "qp", {"name": name, "qp": qp})

    async def get_gc(self, name: str) -> int:
        return await self._get_int("gc", {"name": name})

    async def submit_gc(self, name: str, gc: int) -> None:
        await self._request("POST", "gc", {"name": name, "gc": gc})

    # ------------------------------------------------------------------
    # Duels / player kills
    # ------------------------------------------------------------------

    async def get_duels(self, name: str) -> Duels:
        return await self._get_model("duels", {"name": name}, Duels)

    async def submit_duels(self, name: str, duels: Duels) -> None:
        params = {"name": name, **duels.model_dump(by_alias=True)}
        await self._request("POST", "duels", params)

    async def get_pvp_kills(self, name: str) -> PlayerKills:
        return await self._get_model("pks", {"name": name}, PlayerKills)

    async def submit_pvp_kills(self, name: str, kills: PlayerKills) -> None:
        params = {"name": name, **kills.model_dump(by_alias=True)}
        await self._request("POST", "pks", params)
