"""Docker installer for Arch Linux hosts (Python-first, step-driven).

Core design goals:
- Idempotent: an already working Docker install is only verified
- Pacman operations survive a held db lock (bounded retry)
- Fail fast, except for the few checks that only warn
- Centralized logging
"""

__all__ = []
