"""
RawTap Variable Substitution

Replaces {{name}} template tokens in request text.
"""

import re
from typing import Dict, Optional


class VariableSubstitutor:
    """
    Substitute {{name}} tokens with values from a mapping.

    All tokens are replaced in a single pass over the text, so a value that
    itself contains a token is never substituted again. Matching is literal:
    there is no whitespace tolerance inside the braces and no escape syntax.

    Example:
        substitutor = VariableSubstitutor({'user': 'alice'})
        substitutor.substitute('GET /users/{{user}} HTTP/1.1')
        # 'GET /users/alice HTTP/1.1'
    """

    def __init__(self, variables: Optional[Dict[str, str]] = None):
        """
        Initialize substitutor.

        Args:
            variables: Dict mapping token names to values
        """
        self.variables = dict(variables or {})
        self._tokens = {f'{{{{{name}}}}}': value for name, value in self.variables.items()}
        self._pattern = self._compile()

    def _compile(self) -> Optional[re.Pattern]:
        """Build one alternation over every token, longest first."""
        if not self._tokens:
            return None
        ordered = sorted(self._tokens, key=len, reverse=True)
        return re.compile('|'.join(re.escape(token) for token in ordered))

    def substitute(self, text: str) -> str:
        """Substitute all tokens in a string."""
        if self._pattern is None or not text:
            return text
        return self._pattern.sub(lambda match: self._tokens[match.group(0)], text)
