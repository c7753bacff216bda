from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once.

    Later calls only adjust the level, so building several apps in one
    process (tests) does not stack handlers.
    """

    root = logging.getLogger()
    lvl = logging.getLevelName((level or "INFO").upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO

    if getattr(root, "_stegvault_configured", False):
        root.setLevel(lvl)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root.setLevel(lvl)
    root._stegvault_configured = True  # type: ignore[attr-defined]
