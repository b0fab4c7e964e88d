#!/usr/bin/env python3
"""Development server runner for Binary Homeworlds."""

import argparse

import uvicorn


def main():
    """Parse command-line options and start the API server."""
    parser = argparse.ArgumentParser(description="Binary Homeworlds API server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=9000, help="Port (default: 9000)")
    parser.add_argument(
        "--reload", action="store_true", help="Auto-reload on code changes (development)"
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Server log level (default: info)",
    )
    args = parser.parse_args()

    uvicorn.run(
        "homeworlds.server.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
