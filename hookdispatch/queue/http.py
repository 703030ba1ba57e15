"""Build queue that forwards requests to a remote build server over HTTP.

Endpoints (relative to the configured base URL):
    POST /jobs/{job_id}/builds   schedule a build
    POST /jobs/{job_id}/polls    request a poll

Both take the JSON produced by BuildRequest.to_payload().
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from hookdispatch.domain.models import BuildCause, BuildRequest, JobCandidate, RequestType
from hookdispatch.logging import get_logger

from .base import BuildQueueClient
from .exceptions import (
    BuildQueueConfigurationError,
    BuildQueueHTTPError,
    BuildQueueTimeoutError,
)

logger = get_logger(__name__, component="queue")


class HttpBuildQueue(BuildQueueClient):
    """Queue client for a remote build server.

    Attributes:
        base_url: Base URL of the build server, without trailing slash
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: int = 30,
        user_agent: str = "PushHookDispatcher/1.0",
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Build server URL (http:// or https://)
            token: Optional bearer token
            timeout: HTTP request timeout in seconds (range 5-300)
            user_agent: User-Agent header for requests

        Raises:
            BuildQueueConfigurationError: If any argument is invalid
        """
        if not base_url or not base_url.startswith(("http://", "https://")):
            raise BuildQueueConfigurationError(
                f"Build queue URL must start with http:// or https://, got: {base_url!r}"
            )
        if not 5 <= timeout <= 300:
            raise BuildQueueConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise BuildQueueConfigurationError("user_agent cannot be empty")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = requests.Session()
        self._session.headers.update(
            {"User-Agent": self.user_agent, "Content-Type": "application/json"}
        )
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def schedule_build(
        self, job: JobCandidate, quiet_period_seconds: int, cause: BuildCause
    ) -> BuildRequest:
        request = self._new_request(job, RequestType.BUILD, cause, quiet_period_seconds)
        self._post(self._job_url(job.job_id, "builds"), request.to_payload())
        return request

    def request_poll(self, job: JobCandidate, cause: BuildCause) -> BuildRequest:
        request = self._new_request(job, RequestType.POLL, cause)
        self._post(self._job_url(job.job_id, "polls"), request.to_payload())
        return request

    def close(self) -> None:
        self._session.close()

    def _job_url(self, job_id: str, action: str) -> str:
        return f"{self.base_url}/jobs/{quote(job_id, safe='')}/{action}"

    def _post(self, url: str, json_data: Dict[str, Any]) -> None:
        """POST a request with error handling.

        Raises:
            BuildQueueHTTPError: On 4xx or 5xx HTTP status, or connection failure
            BuildQueueTimeoutError: On request timeout
        """
        try:
            logger.debug(
                f"HTTP POST request to {url}",
                extra={"event": "queue.http.request", "url": url, "timeout": self.timeout},
            )

            response = self._session.post(url, json=json_data, timeout=self.timeout)

            if response.status_code >= 400:
                is_retryable = response.status_code >= 500
                logger.log(
                    logging.WARNING if is_retryable else logging.ERROR,
                    f"HTTP {response.status_code} error from {url}",
                    extra={
                        "event": "queue.http.error",
                        "status_code": response.status_code,
                        "url": url,
                    },
                )
                raise BuildQueueHTTPError(
                    f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    url=url,
                )

            logger.debug(
                "HTTP request succeeded",
                extra={
                    "event": "queue.http.succeeded",
                    "status_code": response.status_code,
                    "url": url,
                },
            )

        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={"event": "queue.http.timeout", "url": url, "timeout": self.timeout},
            )
            raise BuildQueueTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "queue.http.error",
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise BuildQueueHTTPError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
            ) from e
