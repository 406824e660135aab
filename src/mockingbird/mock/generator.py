"""
MockingBird Response Generator

Builds the response for an intercepted request from a matched bundle entry,
or the 501 diagnostic response when nothing matched.
"""

import logging
import os
from typing import Dict, Optional
from dataclasses import dataclass, field

from ..bundle import MockEntry


NOT_IMPLEMENTED_STATUS = 501

logger = logging.getLogger("mockingbird.mock")


@dataclass
class SynthesizedResponse:
    """Status, headers and optional body of a mocked response."""

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


def _set_header(headers: Dict[str, str], name: str, value: str):
    # Header names are case-insensitive; replace any existing spelling
    for existing in [k for k in headers if k.lower() == name.lower()]:
        del headers[existing]
    headers[name] = value


class ResponseGenerator:
    """
    Response generator for intercepted requests.

    Response bodies are read from disk on every call; nothing is cached.

    Example:
        generator = ResponseGenerator()
        response = generator.generate(entry, bundle.base_path)

        print(response.status_code, response.headers.get('Content-Length'))
    """

    def generate(self, entry: MockEntry, base_path: str) -> SynthesizedResponse:
        """
        Generate the response for a matched entry.

        Headers start from the entry's headers. ``response_mime`` replaces
        any ``Content-Type``. When the response file can be read,
        ``Content-Length`` is set to its size; a missing or unreadable file
        yields a response without body and without ``Content-Length``.

        Args:
            entry: Matched bundle entry
            base_path: Bundle directory the response file is relative to

        Returns:
            SynthesizedResponse
        """
        headers = dict(entry.response_headers)
        if entry.response_mime is not None:
            _set_header(headers, 'Content-Type', entry.response_mime)

        body = self._load_body(entry.response_file, base_path)
        if body is not None:
            _set_header(headers, 'Content-Length', str(len(body)))

        return SynthesizedResponse(
            status_code=entry.response_code,
            headers=headers,
            body=body
        )

    def generate_not_found(self, bundle_path: Optional[str]) -> SynthesizedResponse:
        """
        Generate the 501 response for an unmatched request.

        Args:
            bundle_path: Base path of the active bundle, or None if no bundle is active

        Returns:
            SynthesizedResponse with a plain text explanation
        """
        if bundle_path is None:
            message = "MockingBird response not available. Please add a response to a mock bundle; no mock bundle is active."
        else:
            message = f"MockingBird response not available. Please add a response to the bundle at {bundle_path}."

        body = message.encode('utf-8')
        return SynthesizedResponse(
            status_code=NOT_IMPLEMENTED_STATUS,
            headers={
                'Content-Type': 'text/plain',
                'Content-Length': str(len(body))
            },
            body=body
        )

    def _load_body(self, response_file: Optional[str], base_path: str) -> Optional[bytes]:
        if response_file is None:
            return None

        path = os.path.join(base_path, response_file)
        try:
            with open(path, 'rb') as f:
                return f.read()
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read response file {path}: {e}")
            return None
