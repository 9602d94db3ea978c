"""HTTP liveness probe"""

import logging
from typing import Optional

import httpx

from ..constants import APP_NAME, DEFAULT_PROBE_TIMEOUT
from ..models.result import ProbeResult
from ..__version__ import __version__

logger = logging.getLogger(__name__)


class HealthService:
    """Issues a single request against the deployed service

    Redirects are not followed, so a login redirect (302) counts as
    responding. No retries.
    """

    def __init__(self,
                 timeout: float = DEFAULT_PROBE_TIMEOUT,
                 client: Optional[httpx.Client] = None):
        self.timeout = timeout
        self._client = client

    def _build_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=False,
            headers={"User-Agent": f"{APP_NAME}/{__version__}"},
        )

    def probe(self, url: str) -> ProbeResult:
        """
        Request ``url`` once and record the outcome

        Args:
            url: Service URL

        Returns:
            ProbeResult; connection failures are captured, never raised
        """
        client = self._client or self._build_client()
        try:
            response = client.get(url)
        except httpx.HTTPError as e:
            logger.info("Probe of %s failed: %s", url, e)
            return ProbeResult(url=url, error=str(e) or e.__class__.__name__)
        finally:
            if self._client is None:
                client.close()

        logger.info("Probe of %s returned %s", url, response.status_code)
        return ProbeResult(url=url, status_code=response.status_code)
