#!/usr/bin/env python
"""
Server Entry Point

Usage:
    Development:  python run_server.py --dev
    Production:   python run_server.py

    Or with Gunicorn:
    gunicorn agency_dashboard.main:app -c gunicorn.conf.py

The metric store lives in process memory, so production runs use a single
worker unless API_WORKERS is set explicitly.
"""

import argparse
import os
import subprocess

import uvicorn

from agency_dashboard.config import get_settings


def run_dev_server(port: int):
    """Run development server with auto-reload."""
    uvicorn.run(
        "agency_dashboard.main:app",
        host=get_settings().api_host,
        port=port,
        reload=True,
        reload_dirs=["agency_dashboard"],
        log_level="debug",
        access_log=True,
    )


def run_prod_server(port: int):
    """Run production server with Uvicorn directly."""
    settings = get_settings()
    uvicorn.run(
        "agency_dashboard.main:app",
        host=settings.api_host,
        port=port,
        workers=settings.api_workers,
        reload=settings.api_reload,
        log_level=settings.monitoring.log_level.lower(),
        access_log=True,
        proxy_headers=True,
        forwarded_allow_ips="*",
        server_header=False,
        date_header=True,
    )


def run_gunicorn():
    """Run with Gunicorn."""
    subprocess.run(["gunicorn", "agency_dashboard.main:app", "-c", "gunicorn.conf.py"], check=False)


def main():
    parser = argparse.ArgumentParser(description="Agency Analytics Dashboard API Server")
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run in development mode with auto-reload"
    )
    parser.add_argument(
        "--gunicorn",
        action="store_true",
        help="Run with Gunicorn"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", get_settings().api_port)),
        help="Port to run on (default: 8000)"
    )

    args = parser.parse_args()
    os.environ["PORT"] = str(args.port)

    if args.dev:
        run_dev_server(args.port)
    elif args.gunicorn:
        run_gunicorn()
    else:
        run_prod_server(args.port)


if __name__ == "__main__":
    main()
