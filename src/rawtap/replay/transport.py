"""
RawTap Transport Session

The HTTP execution collaborator: a requests.Session configured once per
invocation for TLS trust, cookies, proxying and redirect handling.
"""

import logging
from typing import Optional

import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


class TransportSession:
    """
    Send prepared requests exactly once.

    - Certificate verification is off unless ``verify_ssl`` is set
    - Redirects are not followed: the first 3xx response is returned
    - Cookies set by the response are kept in the session jar
    - No retries

    The session is configured in the constructor and not changed afterwards.

    Example:
        transport = TransportSession(proxy='http://127.0.0.1:8080')
        response = transport.send(transport.prepare(request))
    """

    def __init__(
        self,
        verify_ssl: bool = False,
        proxy: Optional[str] = None,
        timeout: int = 30
    ):
        """
        Initialize transport.

        Args:
            verify_ssl: Whether to verify TLS certificates
            proxy: Optional proxy URL used for both http and https
            timeout: Request timeout in seconds
        """
        self.verify_ssl = verify_ssl
        self.proxy = proxy
        self.timeout = timeout
        self.logger = logging.getLogger("rawtap.transport")

        if not verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session without retries."""
        session = requests.Session()
        session.verify = self.verify_ssl

        if self.proxy:
            session.proxies = {'http': self.proxy, 'https': self.proxy}

        retry_strategy = Retry(total=0, read=False, redirect=False)
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def prepare(self, request: requests.Request) -> requests.PreparedRequest:
        """Prepare a request, merging in session cookies."""
        return self.session.prepare_request(request)

    def send(self, prepared: requests.PreparedRequest) -> requests.Response:
        """
        Send a prepared request.

        Raises:
            requests.exceptions.RequestException: Transport failures, unchanged
        """
        self.logger.info(f"Sending {prepared.method} {prepared.url}")

        response = self.session.send(
            prepared,
            allow_redirects=False,
            timeout=self.timeout,
            verify=self.verify_ssl,
            proxies=self.session.proxies
        )

        self.logger.info(f"Received {response.status_code} from {prepared.url}")
        return response

    def close(self):
        """Release pooled connections."""
        self.session.close()
