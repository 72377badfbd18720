#!/usr/bin/env python3
"""
TODO API -- per-user TODO lists behind an external identity provider.

Usage:
  python main.py
  python main.py --port 5000
  python main.py --host 0.0.0.0 --port 8080
  python main.py --reload
  python main.py --frontend ./frontend/dist/todo-app/browser

Environment variables (or .env):
  COGNITO_USER_POOL_ID    Cognito user pool that issues the tokens (required unless DEBUG=true)
  COGNITO_APP_CLIENT_ID   App client id the tokens must be issued to (required unless DEBUG=true)
  COGNITO_REGION          Pool region. Default us-east-1.
  CORS_ORIGINS            JSON list of browser origins. Default ["http://localhost:4200"].
  FRONTEND_DIST           Built frontend directory to serve next to the API.
  DEBUG                   true enables /docs and relaxes startup checks.

All items live in memory and are lost when the process stops.
"""

import argparse
import os

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="todoapi",
        description="Serve the TODO REST API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  python main.py\n"
            "  python main.py --port 5000 --reload\n"
            "  python main.py --frontend ./dist/todo-app/browser\n"
        ),
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Interface to bind (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=5000,
        help="Port to listen on (default: 5000).",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on code changes. Development only -- every restart empties the store.",
    )
    parser.add_argument(
        "--frontend",
        metavar="DIR",
        help="Serve the built frontend from DIR (same as FRONTEND_DIST).",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Server log level (default: info).",
    )
    args = parser.parse_args()

    # Settings are read at import of asgi, so the flag must land in the
    # environment before uvicorn imports the app.
    if args.frontend:
        os.environ["FRONTEND_DIST"] = args.frontend

    uvicorn.run(
        "asgi:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
