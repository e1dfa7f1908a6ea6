"""Global constants for service readiness probes.

This module defines constants used throughout the package to avoid
hardcoded values and make the codebase more maintainable.
"""

# Any 2xx answer or a 404 means the application server is answering HTTP,
# even when the probed path is not mapped.
DEFAULT_ACCEPTABLE_STATUSES: frozenset[int] = frozenset(range(200, 300)) | {404}

DEFAULT_HOST = "127.0.0.1"
DEFAULT_HTTP_METHOD = "GET"
ALLOWED_HTTP_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})

# Seconds
DEFAULT_INTERVAL = 1.0
DEFAULT_ATTEMPT_TIMEOUT = 5.0

# Waiting for a stopped service to release its port
DEFAULT_RELEASE_ATTEMPTS = 10

DEFAULT_PLUGIN_PATTERN = "*.hpi"
