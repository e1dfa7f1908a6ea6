"""CLI module for service-readiness.

Provides command-line access to the readiness probes and plugin manifests.
"""

from service_readiness.cli.app import app

__all__ = ["app"]
