"""``BackendProtocol`` over HTTP.

Each call is ``POST <base_url>/invoke/<command>`` with the command's
arguments as a JSON object. The response body is the command's JSON
result; a body of the form ``{"error": "..."}`` is a failed command.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from roster.backend.payload import validate_update_payload
from roster.config import DEFAULT_REQUEST_TIMEOUT, RosterConfig
from roster.protocols import BackendError, RosterError

logger = logging.getLogger(__name__)


class HttpBackend:
    """Talks to a save-file backend service.

    Pass ``client`` to share or mock an ``httpx.AsyncClient``; otherwise
    one is created on first use and closed by ``aclose``.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: Optional[str] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_config(cls, config: RosterConfig) -> "HttpBackend":
        if not config.backend_url:
            raise RosterError("No backend URL configured (set ROSTER_BACKEND_URL)")
        return cls(config.backend_url, config.auth_token, config.request_timeout)

    async def __aenter__(self) -> "HttpBackend":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def invoke(self, command: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Run one backend command and return its decoded result.

        Raises:
            BackendError: Transport failure, non-2xx status, undecodable
                body or an ``error`` result.
        """
        url = f"{self.base_url}/invoke/{command}"
        try:
            response = await self._get_client().post(
                url, json=arguments or {}, headers=self._headers()
            )
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Backend %s returned %s", command, e.response.status_code)
            raise BackendError(command, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Backend %s unreachable: %s", command, e)
            raise BackendError(command, f"Network error: {e}") from e
        except ValueError as e:
            logger.error("Backend %s sent invalid JSON: %s", command, e)
            raise BackendError(command, "Invalid JSON response") from e

        if isinstance(result, dict) and "error" in result:
            raise BackendError(command, str(result["error"]))
        return result

    # === BackendProtocol ===

    async def list_by_category(self, category: str) -> List[Dict[str, Any]]:
        result = await self.invoke("get_persons", {"profession": category})
        if not isinstance(result, list):
            raise BackendError("get_persons", f"Expected a list, got {type(result).__name__}")
        return result

    async def update_one(self, category: str, person_id: str, edit: Dict[str, Any]) -> None:
        validate_update_payload(edit)
        await self.invoke(
            "update_person",
            {"profession": category, "personId": str(person_id), "update": edit},
        )

    async def update_many(self, category: str, group_id: str, field: str, value: float) -> int:
        result = await self.invoke(
            "update_people",
            {"profession": category, "studioId": group_id, "field": field, "value": value},
        )
        if result is None:
            return 0
        if isinstance(result, bool) or not isinstance(result, (int, float)):
            raise BackendError("update_people", f"Expected a count, got {type(result).__name__}")
        return int(result)

    async def get_translation_table(self, language_code: str) -> List[str]:
        result = await self.invoke("get_language_strings", {"languageCode": language_code})
        if not isinstance(result, list):
            raise BackendError(
                "get_language_strings", f"Expected a list, got {type(result).__name__}"
            )
        return [str(name) if name is not None else "" for name in result]

    async def get_current_date(self) -> str:
        return str(await self.invoke("get_current_date"))
