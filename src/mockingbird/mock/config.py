"""
MockingBird Configuration

Configuration from environment variables or a YAML file.

Environment variables:
    MOCKINGBIRD_BUNDLE      - Bundle directory to activate
    MOCKINGBIRD_HANDLE_ALL  - Claim unmatched requests with a 501 (1/true/yes/on)
    MOCKINGBIRD_LOG_LEVEL   - Log level for the ``mockingbird`` logger

YAML file:
    bundle: tests/bundles/httpbin
    handle_all_requests: true
    log_level: debug
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass
import yaml

from ..bundle import MockBundle
from ..common import parse_bool
from .state import set_mock_bundle, set_handle_all_requests


ENV_BUNDLE = 'MOCKINGBIRD_BUNDLE'
ENV_HANDLE_ALL = 'MOCKINGBIRD_HANDLE_ALL'
ENV_LOG_LEVEL = 'MOCKINGBIRD_LOG_LEVEL'


@dataclass
class MockingBirdConfig:
    """Configuration for process-wide mocking."""

    bundle_path: Optional[str] = None
    handle_all_requests: bool = False
    log_level: str = "warning"

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'MockingBirdConfig':
        """
        Create config from environment variables.

        Args:
            environ: Environment mapping (defaults to os.environ)
        """
        env = os.environ if environ is None else environ
        return cls(
            bundle_path=env.get(ENV_BUNDLE) or None,
            handle_all_requests=parse_bool(env.get(ENV_HANDLE_ALL)),
            log_level=env.get(ENV_LOG_LEVEL) or "warning"
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'MockingBirdConfig':
        """
        Load config from a YAML file.

        Relative bundle paths are resolved against the YAML file's directory.
        """
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        config = cls.from_dict(data)
        if config.bundle_path and not os.path.isabs(config.bundle_path):
            config.bundle_path = str(Path(yaml_path).parent / config.bundle_path)
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MockingBirdConfig':
        """Create config from dictionary."""
        handle_all = data.get('handle_all_requests', False)
        if isinstance(handle_all, str):
            handle_all = parse_bool(handle_all)

        return cls(
            bundle_path=data.get('bundle'),
            handle_all_requests=bool(handle_all),
            log_level=str(data.get('log_level', 'warning'))
        )

    def configure_logging(self):
        """
        Set the level of the ``mockingbird`` logger.

        Unknown level names fall back to WARNING.
        """
        root = logging.getLogger("mockingbird")
        level = getattr(logging, self.log_level.upper(), None)
        if not isinstance(level, int):
            root.warning(f"Unknown log level {self.log_level!r}, using WARNING")
            level = logging.WARNING
        root.setLevel(level)

    def apply(self) -> Optional[MockBundle]:
        """
        Install this configuration into process-wide state.

        The bundle is installed first; if it fails to load, nothing changes.

        Returns:
            The active bundle after applying

        Raises:
            BundleError: If the bundle cannot be loaded
        """
        self.configure_logging()
        bundle = set_mock_bundle(self.bundle_path)
        set_handle_all_requests(self.handle_all_requests)
        return bundle
