"""CLI entry point.

Usage:
    python -m service_readiness.cli probe wait --port 8080 --url http://127.0.0.1:8080/
    service-readiness probe wait-closed --port 8080
    service-readiness plugins status /var/lib/jenkins/plugins -m plugins.json
"""

from service_readiness.cli.app import app


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
