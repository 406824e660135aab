"""
MockingBird Bundle Models

Immutable data model for mock bundles and their entries.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MockEntry:
    """
    One rule in a mock bundle, mapping a request shape to a canned response.

    ``query_parameters`` maps a parameter name to its expected value, or to
    None for a wildcard that only requires the parameter to be present.
    """

    url: str
    response_code: int
    method: str = "GET"
    query_parameters: Mapping[str, Optional[str]] = field(default_factory=dict)
    response_headers: Mapping[str, str] = field(default_factory=dict)
    response_file: Optional[str] = None
    response_mime: Optional[str] = None

    def __post_init__(self):
        # Freeze mappings so entries can be shared across threads
        object.__setattr__(self, 'query_parameters', MappingProxyType(dict(self.query_parameters)))
        object.__setattr__(self, 'response_headers', MappingProxyType(dict(self.response_headers)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the manifest's ``request``/``response`` shape."""
        request: Dict[str, Any] = {
            'url': self.url,
            'method': self.method,
            'parameters': dict(self.query_parameters)
        }
        response: Dict[str, Any] = {
            'code': self.response_code,
            'headers': dict(self.response_headers)
        }
        if self.response_file is not None:
            response['file'] = self.response_file
        if self.response_mime is not None:
            response['mime_type'] = self.response_mime

        return {'request': request, 'response': response}


@dataclass(frozen=True)
class MockBundle:
    """
    Ordered collection of mock entries plus the directory they were loaded from.

    Entry order is match priority: the first matching entry wins.
    """

    entries: Tuple[MockEntry, ...]
    base_path: str

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[MockEntry]:
        return iter(self.entries)

    def to_list(self) -> list:
        """Convert entries back to manifest form."""
        return [entry.to_dict() for entry in self.entries]
