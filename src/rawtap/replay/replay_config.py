"""
RawTap Replay Configuration

YAML-based replay settings, layered under command-line options.

Example file:
    scheme: https
    proxy: http://127.0.0.1:8080
    timeout: 10
    dump_response: true
    variables:
      user_id: "42"
      token: abc123
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional

import yaml

SCHEMES = ('http', 'https')
LOG_LEVELS = ('debug', 'info', 'warning', 'error')


@dataclass
class ReplayConfig:
    """Settings for a single replay invocation."""

    scheme: str = "http"
    variables: Dict[str, str] = field(default_factory=dict)
    proxy: Optional[str] = None
    timeout: int = 30
    verify_ssl: bool = False
    dump_response: bool = False
    log_level: str = "warning"

    def __post_init__(self):
        if self.scheme not in SCHEMES:
            raise ValueError(f"Unsupported scheme {self.scheme!r}, expected one of {SCHEMES}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level {self.log_level!r}, expected one of {LOG_LEVELS}")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be a positive number of seconds, got {self.timeout!r}")

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'ReplayConfig':
        """Load config from YAML file."""
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping at the top of {yaml_path}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReplayConfig':
        """Create config from dictionary."""
        raw_variables = data.get('variables') or {}
        if not isinstance(raw_variables, dict):
            raise ValueError(f"'variables' must be a mapping of names to values, "
                             f"got {type(raw_variables).__name__}")
        # YAML turns bare numbers into ints, substitutions are always text
        variables = {str(k): str(v) for k, v in raw_variables.items()}

        return cls(
            scheme=data.get('scheme', 'http'),
            variables=variables,
            proxy=data.get('proxy'),
            timeout=int(data['timeout']) if data.get('timeout') is not None else 30,
            verify_ssl=bool(data.get('verify_ssl', False)),
            dump_response=bool(data.get('dump_response', False)),
            log_level=data.get('log_level', 'warning')
        )

    def merge_cli(
        self,
        https: bool = False,
        variables: Optional[Dict[str, str]] = None,
        proxy: Optional[str] = None,
        timeout: Optional[int] = None,
        verify_ssl: bool = False,
        dump_response: bool = False,
        log_level: Optional[str] = None
    ) -> 'ReplayConfig':
        """
        Layer command-line values over this config.

        Flags only switch settings on; options given on the command line
        replace file values; variables are merged with CLI values winning.
        """
        if https:
            self.scheme = 'https'
        if variables:
            self.variables = {**self.variables, **variables}
        if proxy:
            self.proxy = proxy
        if timeout is not None:
            self.timeout = timeout
        if verify_ssl:
            self.verify_ssl = True
        if dump_response:
            self.dump_response = True
        if log_level:
            self.log_level = log_level
        self.__post_init__()
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        return asdict(self)

    def save(self, output_path: str):
        """Save config to YAML file."""
        with open(output_path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
