"""
RawTap - replay captured raw HTTP requests with {{name}} substitutions.
"""

__version__ = '1.0.0'
