"""Managed CMS markers around published fragments."""

from __future__ import annotations

NOT_DOCUMENTED = "<!-- docpress:not-documented -->"


class MarkerManager:
    """Applies docpress markers so a CMS can replace fragments idempotently."""

    BEGIN_FMT = "<!-- docpress:begin:{key} -->"
    END_FMT = "<!-- docpress:end:{key} -->"

    def wrap(self, key: str, body: str) -> str:
        """Wrap a fragment body with managed markers."""
        begin = self.BEGIN_FMT.format(key=key)
        end = self.END_FMT.format(key=key)
        return f"{begin}\n{body.rstrip()}\n{end}\n"


__all__ = ["MarkerManager", "NOT_DOCUMENTED"]
