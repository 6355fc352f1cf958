"""
RawTap Template Module

Raw request template engine: parses a captured HTTP request file, applies
{{name}} substitutions and decodes the body by content type.
"""

from .models import RequestConfig, Section
from .variables import VariableSubstitutor
from .parser import RawRequestParser
from .body import ContentBodyDecoder
from .multipart import MultipartDecomposer

__all__ = [
    'RequestConfig',
    'Section',
    'VariableSubstitutor',
    'RawRequestParser',
    'ContentBodyDecoder',
    'MultipartDecomposer',
]
