"""phpMyAdmin installer for Pterodactyl panel hosts.

Core design goals:
- Detect the host once, pass it around explicitly
- Support and dispatch decisions are table lookups
- Every failure is fatal, nothing is retried
- Centralized logging
"""

__version__ = "canary"

__all__ = ["__version__"]
