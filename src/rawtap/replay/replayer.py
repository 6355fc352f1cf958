"""
RawTap Request Replayer

Replays one raw request file: parse, substitute, build and send.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional

import requests

from ..template import RawRequestParser, RequestConfig
from .builder import RequestBuilder
from .printer import dump_raw_request
from .replay_config import ReplayConfig
from .transport import TransportSession


@dataclass
class ReplayResult:
    """Outcome of replaying a single request."""

    method: str
    url: str
    status_code: int
    reason: str
    duration_ms: float
    response_bytes: int
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    response: Optional[requests.Response] = field(default=None, repr=False, compare=False)

    @property
    def is_redirect(self) -> bool:
        """Whether the server answered with a redirect that was not followed."""
        return 300 <= self.status_code < 400

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'method': self.method,
            'url': self.url,
            'status_code': self.status_code,
            'reason': self.reason,
            'duration_ms': round(self.duration_ms, 2),
            'response_bytes': self.response_bytes,
            'timestamp': self.timestamp,
        }


class RawRequestReplayer:
    """
    Replay a captured raw HTTP request against a live server.

    Example:
        replayer = RawRequestReplayer(ReplayConfig(scheme='https', variables={'id': '7'}))
        result = replayer.replay('login.txt')
        print(result.status_code)
    """

    def __init__(
        self,
        config: Optional[ReplayConfig] = None,
        transport: Optional[TransportSession] = None,
        builder: Optional[RequestBuilder] = None
    ):
        """
        Initialize replayer.

        Args:
            config: Replay settings (defaults to ReplayConfig())
            transport: Optional TransportSession (will create from config if None)
            builder: Optional RequestBuilder (will create if None)
        """
        self.config = config or ReplayConfig()
        self.transport = transport or TransportSession(
            verify_ssl=self.config.verify_ssl,
            proxy=self.config.proxy,
            timeout=self.config.timeout
        )
        self.builder = builder or RequestBuilder()
        self.logger = logging.getLogger("rawtap.replay")

    def load(self, request_file: str) -> RequestConfig:
        """Parse a request file with the configured scheme and variables."""
        parser = RawRequestParser(scheme=self.config.scheme, variables=self.config.variables)
        return parser.parse_file(request_file)

    def prepare(self, request_file: str) -> requests.PreparedRequest:
        """Parse and build a request without sending it."""
        request_config = self.load(request_file)
        return self.transport.prepare(self.builder.build(request_config))

    def replay(self, request_file: str, save_request: Optional[str] = None) -> ReplayResult:
        """
        Replay a request file.

        Args:
            request_file: Path to the raw request file
            save_request: Optional path to write the outgoing request to

        Returns:
            ReplayResult holding the response

        Raises:
            RequestFileError: If the request file cannot be read
            RequestFormatError: If the request file is malformed
            requests.exceptions.RequestException: If sending fails
        """
        prepared = self.prepare(request_file)

        if save_request:
            dump_raw_request(prepared, save_request)
            self.logger.info(f"Saved outgoing request to {save_request}")

        start_time = time.time()
        response = self.transport.send(prepared)
        duration_ms = (time.time() - start_time) * 1000

        result = ReplayResult(
            method=prepared.method,
            url=prepared.url,
            status_code=response.status_code,
            reason=response.reason or '',
            duration_ms=duration_ms,
            response_bytes=len(response.content or b''),
            response=response
        )

        if result.is_redirect:
            self.logger.info(f"Not following redirect to {response.headers.get('Location', '?')}")

        return result

    def save_result(self, result: ReplayResult, output_file: str):
        """
        Save replay result to JSON file.

        Args:
            result: ReplayResult to save
            output_file: Path to output JSON file
        """
        with open(output_file, 'w') as f:
            json.dump(result.to_dict(), f, indent=2)

        print(f"✅ Saved replay result to {output_file}")
