"""
Convenience script to start the FastAPI backend.

Falls back to ports 8081-8084 when 8000 is taken.

Usage:
    python run_backend.py
"""
import socket
import sys

import uvicorn

from countme.config import settings

PORTS_TO_TRY = [8000, 8081, 8082, 8083, 8084]


def is_port_in_use(port: int) -> bool:
    """Check whether a local port is already bound."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind(('127.0.0.1', port))
            return False
        except OSError:
            return True


def main():
    """Start the FastAPI server."""
    port = next((p for p in PORTS_TO_TRY if not is_port_in_use(p)), None)
    if port is None:
        print("Error: ports 8000-8084 are all in use")
        sys.exit(1)
    if port != PORTS_TO_TRY[0]:
        print(f"Port {PORTS_TO_TRY[0]} is in use, switching to {port}")

    print(f"Starting server: http://127.0.0.1:{port}")
    print(f"API docs: http://127.0.0.1:{port}/docs")

    uvicorn.run(
        "countme.main:app",
        host="127.0.0.1",
        port=port,
        reload=settings.env == "local",
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
