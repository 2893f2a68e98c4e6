#!/usr/bin/env python3
"""Start script that launches the API with uvicorn, honoring the PORT environment variable."""

import os
import subprocess
import sys

port = os.environ.get("PORT", "8000")

try:
    port_int = int(port)
except ValueError:
    print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
    port_int = 8000

# Allow running from a source checkout without installing the package
src_path = os.path.join(os.getcwd(), "src")
if os.path.isdir(src_path):
    pythonpath = os.environ.get("PYTHONPATH", "")
    os.environ["PYTHONPATH"] = f"{src_path}{os.pathsep}{pythonpath}" if pythonpath else src_path

cmd = [
    sys.executable,
    "-m",
    "uvicorn",
    "route_engine.main:app",
    "--host",
    "0.0.0.0",
    "--port",
    str(port_int),
    "--proxy-headers",
    "--forwarded-allow-ips",
    "*",
]

print(f"Starting server on port {port_int}...", file=sys.stderr)
print(f"PYTHONPATH={os.environ.get('PYTHONPATH', '')}", file=sys.stderr)

try:
    result = subprocess.call(cmd)
    if result != 0:
        print(f"Uvicorn exited with code {result}", file=sys.stderr)
    sys.exit(result)
except KeyboardInterrupt:
    print("Server interrupted by user", file=sys.stderr)
    sys.exit(0)
