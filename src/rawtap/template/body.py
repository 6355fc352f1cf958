"""
RawTap Content Body Decoder

Interprets a parsed request body according to its declared content type.
"""

from typing import Optional

from ..common import split_pairs
from .models import RequestConfig
from .multipart import MultipartDecomposer


class ContentBodyDecoder:
    """
    Populate the structured body fields of a RequestConfig.

    - application/x-www-form-urlencoded: split into ``params``
    - multipart/form-data: decomposed into ``multipart`` sections
    - anything else (JSON, XML, binary): left as the opaque ``raw_body``
    """

    def __init__(self, multipart_decomposer: Optional[MultipartDecomposer] = None):
        self.multipart_decomposer = multipart_decomposer or MultipartDecomposer()

    def decode(self, config: RequestConfig) -> RequestConfig:
        """
        Decode ``config.raw_body`` in place.

        Raises:
            RequestFormatError: If a multipart body cannot be decomposed
        """
        if config.is_form_urlencoded:
            config.params = split_pairs(config.raw_body)
        elif config.is_multipart:
            config.multipart = self.multipart_decomposer.decompose(
                config.raw_body, config.content_type
            )

        return config
