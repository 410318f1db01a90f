"""Main entry point for the agent tools server."""

from __future__ import annotations

import logging
import sys

from agent_tools.core.resources import get_resources
from agent_tools.server import run_server


def main() -> None:
    """Main entry point."""
    settings = get_resources().settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Parse command line arguments
    transport = "streamable-http"
    host = settings.host
    port = settings.port

    if len(sys.argv) > 1:
        transport = sys.argv[1]
    if len(sys.argv) > 2:
        host = sys.argv[2]
    if len(sys.argv) > 3:
        port = int(sys.argv[3])

    print(f"Starting agent tools server on {host}:{port} with {transport} transport...")
    run_server(transport=transport, host=host, port=port)


if __name__ == "__main__":
    main()
