#!/usr/bin/env python3
"""
Local dashboard runner.

Runs the gateway dashboard API with uvicorn. Settings are read from the
environment and from a .env file in the working directory.

Usage:
    python run_local.py
    python run_local.py --port 8080
    python run_local.py --reload  # Auto-reload on code changes
"""

import argparse
from pathlib import Path

import uvicorn

project_root = Path(__file__).parent


def main():
    parser = argparse.ArgumentParser(
        description="Run the gateway dashboard locally with uvicorn"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Port to run the server on (default: 8080)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on code changes (recommended for development)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["critical", "error", "warning", "info", "debug", "trace"],
        help="Log level for uvicorn (default: info)"
    )

    args = parser.parse_args()

    if not (project_root / ".env").exists():
        print("NOTE: no .env file found, using environment variables and defaults.")
        print("Useful variables:")
        print("  - GATEWAY_URL")
        print("  - STORAGE_PATH")
        print("  - DEFAULT_PAGE_SIZE")

    print("=" * 60)
    print("Starting Gateway Dashboard (Local Development)")
    print("=" * 60)
    print(f"Server: http://{args.host}:{args.port}")
    print(f"API Docs: http://{args.host}:{args.port}/docs")
    print(f"Health: http://{args.host}:{args.port}/health")
    print("=" * 60)
    if args.reload:
        print("Auto-reload: ENABLED (code changes will restart server)")
    print()

    uvicorn.run(
        "gateway_dashboard.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
        reload_dirs=[str(project_root / "src")] if args.reload else None
    )


if __name__ == "__main__":
    main()
