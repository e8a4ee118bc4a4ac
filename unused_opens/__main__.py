from __future__ import annotations

from unused_opens._main import main

if __name__ == "__main__":
    raise SystemExit(main())
