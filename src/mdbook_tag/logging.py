from __future__ import annotations

import logging
import sys

def get_logger(name: str = "mdbook_tag") -> logging.Logger:
    log = logging.getLogger(name)
    if log.handlers:
        return log
    # stdout carries the book JSON back to mdbook
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    log.addHandler(h)
    log.setLevel(logging.INFO)
    return log
