from __future__ import annotations

from docker_installer.main import main

if __name__ == "__main__":
    raise SystemExit(main())
