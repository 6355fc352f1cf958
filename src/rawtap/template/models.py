"""
RawTap Request Model

Structured representation of a raw HTTP request file.
"""

from dataclasses import dataclass, field
from typing import Dict, List

# One decomposed multipart part: header/parameter names plus a reserved 'body' key
Section = Dict[str, str]


@dataclass
class RequestConfig:
    """A parsed raw request, ready to be turned into an executable request."""

    method: str = ""
    content_type: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    multipart: List[Section] = field(default_factory=list)
    url: str = ""
    raw_body: str = ""
    scheme: str = "http"

    @property
    def is_multipart(self) -> bool:
        """Whether the body is declared as multipart/form-data."""
        return self.content_type.startswith('multipart/form-data')

    @property
    def is_form_urlencoded(self) -> bool:
        """Whether the body is declared as a urlencoded form."""
        return self.content_type == 'application/x-www-form-urlencoded'

