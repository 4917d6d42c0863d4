"""
api-specs Variable Resolution

Merges collection and environment scopes and substitutes {{name}}
placeholders in request text.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Tuple

VariableScope = Dict[str, str]


def merge_scopes(
    collection_vars: Optional[Mapping[str, str]],
    environment_vars: Optional[Mapping[str, str]] = None
) -> VariableScope:
    """
    Merge collection-level and environment-level variables.

    Environment values shadow collection values for the same key.

    Example:
        merge_scopes({'a': '1'}, {'a': '2'})  # {'a': '2'}
    """
    return {**(collection_vars or {}), **(environment_vars or {})}


def _placeholder_pattern(keys: Iterable[str]) -> Optional[Pattern]:
    keys = sorted(keys, key=len, reverse=True)
    if not keys:
        return None
    return re.compile('|'.join(re.escape('{{' + key + '}}') for key in keys))


class VariableSubstitutor:
    """
    Substitute {{variable}} placeholders using a fixed scope.

    Substitution is a single left-to-right pass: inserted values are never
    scanned again, and placeholders for unknown keys are left as they are.
    """

    def __init__(self, variables: Mapping[str, str]):
        """
        Initialize substitutor.

        Args:
            variables: Dict mapping variable names to values
        """
        self.variables = dict(variables)
        self._pattern = _placeholder_pattern(self.variables)

    def substitute(self, text: str) -> str:
        """Substitute all known variables in a string."""
        if not text or self._pattern is None:
            return text
        return self._pattern.sub(lambda match: self.variables[match.group(0)[2:-2]], text)

    def substitute_headers(self, headers: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]:
        """Substitute variables in header values (names are kept as-is)."""
        return [(name, self.substitute(value)) for name, value in headers]


def substitute(text: str, scope: Mapping[str, str]) -> str:
    """Replace every {{key}} in text with scope[key]."""
    return VariableSubstitutor(scope).substitute(text)
