#!/usr/bin/env python3
"""
User management -- session-based signup, login and a role-gated dashboard.

Starts the HTTP listener for the assembled app (asgi:app). Every account lives
in process memory: two fixed accounts are seeded at startup and everything
else is gone on restart.

Usage:
  python main.py
  python main.py --port 8080
  python main.py --host 0.0.0.0 --reload

Environment variables (see core/config.py):
  SECRET_KEY      Session signing key, at least 32 characters. Required unless DEBUG=true.
  DEBUG           true to auto-generate SECRET_KEY for local development.
  BCRYPT_ROUNDS   bcrypt cost factor (default 10).
  HOST / PORT     Listener defaults (127.0.0.1:3000).
"""

import argparse

import uvicorn

from core.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Run the user management web app.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    args = parser.parse_args()

    print(f"Server running at http://{args.host}:{args.port}")
    uvicorn.run(
        "asgi:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
