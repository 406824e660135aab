"""
MockingBird URL Utilities

Shared URL parsing and normalization used by the matcher and host adapters.
"""

from urllib.parse import urlsplit, unquote, unquote_plus
from typing import List, Optional, Tuple, Dict, Any


QueryItems = List[Tuple[str, Optional[str]]]


class URLMatcher:
    """Handles URL normalization for bundle lookups."""

    @staticmethod
    def normalize_url(url: str) -> str:
        """
        Normalize URL to the form used as a bundle key.

        The scheme, user info, query and fragment are dropped. The port is
        only kept when it was written explicitly in the URL.

        Args:
            url: Absolute request URL

        Returns:
            Normalized URL string of the form ``://host[:port]/path``

        Example:
            >>> URLMatcher.normalize_url('http://httpbin.org:8080/get?x=1')
            '://httpbin.org:8080/get'
        """
        parsed = urlsplit(url)

        # Strip credentials, keep host exactly as written
        host_port = parsed.netloc.rpartition('@')[2]
        if parsed.port is None:
            # "host:" with an empty port is the same as no port
            host_port = host_port.rstrip(':')

        return f"://{host_port}{unquote(parsed.path)}"

    @staticmethod
    def query_items(url: str) -> QueryItems:
        """
        Extract query items from a URL in the order they appear.

        A name written without ``=`` yields a ``None`` value. An empty query
        string yields no items.

        Args:
            url: Request URL

        Returns:
            List of (name, value) tuples
        """
        query = urlsplit(url).query
        if not query:
            return []

        items: QueryItems = []
        for piece in query.split('&'):
            if not piece:
                continue
            name, sep, value = piece.partition('=')
            items.append((
                unquote_plus(name),
                unquote_plus(value) if sep else None
            ))
        return items

    @staticmethod
    def parse_url_components(url: str) -> Dict[str, Any]:
        """
        Parse URL into components for diagnostics.

        Args:
            url: URL to parse

        Returns:
            Dict with scheme, normalized key, query items and fragment
        """
        parsed = urlsplit(url)
        return {
            'scheme': parsed.scheme,
            'netloc': parsed.netloc,
            'hostname': parsed.hostname,
            'port': parsed.port,
            'path': parsed.path,
            'normalized': URLMatcher.normalize_url(url),
            'query_items': URLMatcher.query_items(url),
            'fragment': parsed.fragment
        }
