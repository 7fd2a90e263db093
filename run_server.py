#!/usr/bin/env python
"""
Server Entry Point

Usage:
    Development:  python run_server.py --dev
    Production:   python run_server.py
    Gunicorn:     python run_server.py --gunicorn
                  (same as: gunicorn src.main:app -c gunicorn.conf.py)
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))


def run_dev_server(port: int) -> None:
    """Single process with auto-reload."""
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="127.0.0.1",
        port=port,
        reload=True,
        reload_dirs=["src"],
        log_level="debug",
    )


def run_prod_server(port: int) -> None:
    """Uvicorn with multiple workers."""
    import uvicorn
    from src.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.api_host,
        port=port,
        workers=settings.api_workers,
        log_level=settings.monitoring.log_level.lower(),
        proxy_headers=True,
        forwarded_allow_ips="*",
        server_header=False,
    )


def run_gunicorn() -> None:
    subprocess.run(["gunicorn", "src.main:app", "-c", "gunicorn.conf.py"], check=True)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Retail Sales Dashboard API Server")
    parser.add_argument("--dev", action="store_true", help="Run with auto-reload")
    parser.add_argument("--gunicorn", action="store_true", help="Run under Gunicorn")
    parser.add_argument("--port", type=int, default=None, help="Port (default: API_PORT or 5000)")
    args = parser.parse_args()

    port = args.port or int(os.getenv("API_PORT", 5000))
    os.environ["API_PORT"] = str(port)

    if args.dev:
        print(f"🚀 Starting development server on :{port}...")
        run_dev_server(port)
    elif args.gunicorn:
        print("🚀 Starting production server with Gunicorn...")
        run_gunicorn()
    else:
        print(f"🚀 Starting production server with Uvicorn on :{port}...")
        run_prod_server(port)
