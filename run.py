#!/usr/bin/env python3
"""
Judgment Interest Calculator Entry Point

Starts the FastAPI server on the configured host and port.
"""

import sys

from judgment_interest.api import run_server
from judgment_interest.config import get_config
from judgment_interest.logging_config import setup_logging


if __name__ == "__main__":
    config = get_config()
    setup_logging(config.log_level, fmt=config.log_format)

    print("Starting Judgment Interest Calculator...")
    print(f"API available at: http://localhost:{config.api_port}")
    print(f"Documentation at: http://localhost:{config.api_port}/docs")
    print()

    try:
        run_server(host=config.api_host, port=config.api_port)
    except KeyboardInterrupt:
        print("\nShutting down Judgment Interest Calculator...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
