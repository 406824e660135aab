"""
MockingBird Bundle Loader

Loads a mock bundle directory (``bundle.json`` plus response files) into an
immutable MockBundle.
"""

import json
import logging
import math
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..common import get_object, get_string, get_number, is_null
from .errors import BundleNotFoundError, InvalidManifestError, InvalidBundleError
from .models import MockEntry, MockBundle


MANIFEST_NAME = 'bundle.json'

logger = logging.getLogger("mockingbird.bundle")


def parse_entry(item: Any, index: int = 0) -> MockEntry:
    """
    Build a MockEntry from one element of the manifest array.

    Required fields raise InvalidManifestError; optional fields with the
    wrong type are ignored.

    Args:
        item: Parsed JSON value of the array element
        index: Position in the manifest, used in error messages

    Returns:
        Validated MockEntry

    Raises:
        InvalidManifestError: If the element is not a valid entry
    """
    if not isinstance(item, dict):
        raise InvalidManifestError(f"Entry {index} is not an object")

    request = get_object(item, 'request')
    response = get_object(item, 'response')
    if request is None or response is None:
        raise InvalidManifestError(f"Entry {index} needs 'request' and 'response' objects")

    url = get_string(request, 'url')
    if not url:
        raise InvalidManifestError(f"Entry {index} has no non-empty string 'request.url'")

    code = get_number(response, 'code')
    if code is None or (isinstance(code, float) and not math.isfinite(code)):
        raise InvalidManifestError(f"Entry {index} has no numeric 'response.code'")

    return MockEntry(
        url=url,
        method=_parse_method(request),
        query_parameters=_parse_parameters(request, index),
        response_code=int(code),
        response_headers=_parse_headers(response),
        response_file=get_string(response, 'file'),
        response_mime=get_string(response, 'mime_type')
    )


def _parse_method(request: Dict[str, Any]) -> str:
    method = get_string(request, 'method')
    return "GET" if method is None else method


def _parse_parameters(request: Dict[str, Any], index: int) -> Dict[str, Optional[str]]:
    parameters = get_object(request, 'parameters')
    if parameters is None:
        return {}

    result: Dict[str, Optional[str]] = {}
    for name in parameters:
        value = get_string(parameters, name)
        if value is not None:
            result[name] = value
        elif is_null(parameters, name):
            result[name] = None
        else:
            logger.warning(f"Entry {index}: query parameter {name!r} has invalid value, skipping")
    return result


def _parse_headers(response: Dict[str, Any]) -> Dict[str, str]:
    headers = get_object(response, 'headers')
    if headers is None:
        return {}

    return {
        name: headers[name]
        for name in headers
        if get_string(headers, name) is not None
    }


class BundleLoader:
    """
    Loader for mock bundle directories.

    A bundle is a directory holding ``bundle.json``, a JSON array of
    request/response entries, plus any response body files the entries
    reference by relative path.

    Example:
        loader = BundleLoader("tests/bundles/httpbin")
        bundle = loader.load()

        for entry in bundle:
            print(entry.method, entry.url)
    """

    def __init__(self, base_path: str):
        """
        Initialize bundle loader.

        Args:
            base_path: Path to the bundle directory
        """
        self.base_path = Path(base_path)

    @property
    def manifest_path(self) -> Path:
        return self.base_path / MANIFEST_NAME

    def load(self) -> MockBundle:
        """
        Load and validate the whole bundle.

        Either every entry validates and a complete bundle is returned, or
        an error is raised and nothing is returned.

        Returns:
            MockBundle with entries in manifest order

        Raises:
            BundleNotFoundError: If the path is missing or not a directory
            InvalidManifestError: If bundle.json is malformed
            InvalidBundleError: If bundle.json cannot be read or parsed
        """
        if not self.base_path.is_dir():
            raise BundleNotFoundError(f"Mock bundle not found: {self.base_path}", path=str(self.base_path))

        base_path = os.path.abspath(self.base_path)
        entries = self._parse_manifest(self._read_manifest())

        bundle = MockBundle(entries=tuple(entries), base_path=base_path)
        logger.info(f"Loaded {len(bundle)} mock entries from {base_path}")
        return bundle

    def _read_manifest(self) -> str:
        try:
            return self.manifest_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidBundleError(
                f"Could not read {self.manifest_path}: {e}",
                path=str(self.base_path)
            ) from e

    def _parse_manifest(self, text: str) -> List[MockEntry]:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidManifestError(
                f"Invalid JSON in {self.manifest_path}: {e}",
                path=str(self.base_path)
            ) from e
        except (ValueError, RecursionError) as e:
            # Well-formed JSON beyond the parser's limits (huge integers, deep nesting)
            raise InvalidBundleError(
                f"Could not parse {self.manifest_path}: {e}",
                path=str(self.base_path)
            ) from e

        if not isinstance(document, list):
            raise InvalidManifestError(
                f"Expected a JSON array in {self.manifest_path}, got {type(document).__name__}",
                path=str(self.base_path)
            )

        entries = []
        for index, item in enumerate(document):
            try:
                entries.append(parse_entry(item, index))
            except InvalidManifestError as e:
                e.path = str(self.base_path)
                raise
        return entries


def load_bundle(base_path: str) -> MockBundle:
    """
    Convenience function to load a bundle in one call.

    Args:
        base_path: Path to the bundle directory

    Returns:
        Loaded MockBundle
    """
    return BundleLoader(base_path).load()
