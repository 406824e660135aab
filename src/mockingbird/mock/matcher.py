"""
MockingBird Request Matcher

Finds the bundle entry that answers an incoming request.

Matching rules:
- URL is compared in normalized ``://host[:port]/path`` form
- Method is compared exactly (case-sensitive)
- Every incoming query parameter must be satisfied by a declared one,
  either with an equal value or a wildcard; declared parameters missing
  from the request are not required
- A request without query parameters only matches entries declaring none
- The first matching entry in bundle order wins

Incoming query names and values are form-decoded before comparison, so
``+`` reads as a space and ``%2B`` as a literal plus. Declared values are
compared as written: a request for ``?q=a+b`` matches ``{"q": "a b"}``,
not ``{"q": "a+b"}``.
"""

from typing import Any, Dict, Mapping, Optional
from dataclasses import dataclass

from ..bundle import MockBundle, MockEntry
from ..common import URLMatcher, QueryItems


@dataclass
class MatchResult:
    """Result of matching a request."""

    matched: bool
    entry: Optional[MockEntry] = None
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'matched': self.matched,
            'reason': self.reason,
            'entry_url': self.entry.url if self.entry else None,
            'entry_method': self.entry.method if self.entry else None
        }


def query_satisfied(declared: Mapping[str, Optional[str]], items: QueryItems) -> bool:
    """
    Check that every incoming query item is accounted for by a declared parameter.

    Args:
        declared: Entry's declared parameters (None value = wildcard)
        items: Incoming (name, value) query items

    Returns:
        True if the entry accepts the query
    """
    if not items:
        return len(declared) == 0

    for name, value in items:
        if name not in declared:
            return False
        expected = declared[name]
        if expected is not None and expected != value:
            return False
    return True


class RequestMatcher:
    """
    Request matcher over a single immutable bundle.

    Holds no mutable state, so one instance can be shared by any number of
    threads.

    Example:
        matcher = RequestMatcher(bundle)
        result = matcher.find_match('GET', 'http://httpbin.org/get?arg1=test')

        if result.matched:
            print(f"Matched {result.entry.url} -> {result.entry.response_code}")
    """

    def __init__(self, bundle: MockBundle):
        """
        Initialize request matcher.

        Args:
            bundle: Bundle to match against
        """
        self.bundle = bundle

    def find_match(self, method: str, url: str) -> MatchResult:
        """
        Find the first entry matching a request.

        Args:
            method: HTTP method
            url: Absolute request URL including any query string

        Returns:
            MatchResult with the matching entry, if any
        """
        normalized = URLMatcher.normalize_url(url)
        items = URLMatcher.query_items(url)

        candidates = 0
        for entry in self.bundle.entries:
            if entry.url != normalized or entry.method != method:
                continue

            candidates += 1
            if query_satisfied(entry.query_parameters, items):
                return MatchResult(
                    matched=True,
                    entry=entry,
                    reason=f"Matched {method} {normalized}"
                )

        if candidates:
            reason = f"{candidates} entries for {method} {normalized} rejected by query parameters"
        else:
            reason = f"No entry for {method} {normalized}"

        return MatchResult(matched=False, reason=reason)


def find_match(bundle: MockBundle, url: str, method: str) -> Optional[MockEntry]:
    """
    Find the first entry in a bundle matching a request.

    Args:
        bundle: Bundle to search
        url: Absolute request URL
        method: HTTP method

    Returns:
        Matching MockEntry or None
    """
    return RequestMatcher(bundle).find_match(method, url).entry
