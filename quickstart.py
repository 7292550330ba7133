#!/usr/bin/env python3
# quickstart.py
"""
Quick start script for urlmap development.
"""

import subprocess
import sys


def main():
    print("urlmap Quick Start\n")

    print(f"Using Python {sys.version}")

    print("Installing urlmap in development mode...")
    subprocess.run([sys.executable, "-m", "pip", "install", "-e", ".[dev]"])

    print("Testing installation...")
    subprocess.run([sys.executable, "-m", "urlmap.cli", "list"])

    print("Ready!")
    print("\nTry these commands:")
    print("  urlmap lookup GLib                     # Base URL for a namespace")
    print("  urlmap resolve Gio class.File.html     # Full link to a symbol page")
    print("  urlmap diagnose                        # Check environment")
    print("  python -m pytest                       # Run tests")
    print("\nConvert a gi-docgen urlmap:")
    print("  urlmap export --table tests/fixtures/urlmap.js --out urlmap.yaml")


if __name__ == "__main__":
    main()
