"""Scan Rust sources for environment variable reads and generate .env files."""

__version__ = "0.1.0"
