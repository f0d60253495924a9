"""Slack Web API client used as the notification sink."""

import logging
from types import TracebackType

import httpx
from pydantic import SecretStr

from reminder.scheduling.types import DeliveryError, Notification, SendOutcome

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://slack.com/api"
DEFAULT_TIMEOUT_SECONDS = 10.0
POST_MESSAGE_METHOD = "chat.postMessage"


class SlackClient:
    """Posts notifications with ``chat.postMessage``.

    The client owns its ``httpx.AsyncClient`` unless one is passed in, and is
    meant to be used as an async context manager:

        async with SlackClient(token) as slack:
            outcome = await slack.send(Notification("C123", "hello"))
    """

    def __init__(
        self,
        token: SecretStr | str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ):
        if isinstance(token, str):
            token = SecretStr(token)
        self._token = token
        self._url = f"{base_url.rstrip('/')}/{POST_MESSAGE_METHOD}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def url(self) -> str:
        return self._url

    async def __aenter__(self) -> "SlackClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(self, notification: Notification) -> SendOutcome:
        """Post a notification.

        Returns:
            The outcome of the exchange, including rejections reported by
            Slack in the response body.

        Raises:
            DeliveryError: If the request could not be completed.
        """
        headers = {
            "Authorization": f"Bearer {self._token.get_secret_value()}",
            "Content-Type": "application/json; charset=utf-8",
        }
        try:
            response = await self._client.post(
                self._url,
                content=notification.to_json(),
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise DeliveryError(f"{type(e).__name__}: {e}") from e

        outcome = SendOutcome.from_response(response.status_code, response.text)
        logger.debug(
            f"{POST_MESSAGE_METHOD} returned {response.status_code}",
            extra={"messaging.chat_id": notification.channel},
        )
        return outcome
