from __future__ import annotations

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def make_slug(name: str) -> str:
    normalized = unicodedata.normalize("NFKC", name).strip().lower()
    return _NON_ALNUM.sub("-", normalized).strip("-")
