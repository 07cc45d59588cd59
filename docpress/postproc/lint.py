"""Whitespace normalisation for generated fragments."""

from __future__ import annotations

from typing import List


class FragmentLinter:
    """Normalises newlines and blank lines while leaving ``<pre>`` content intact."""

    def lint(self, fragment: str) -> str:
        normalized = fragment.replace("\r\n", "\n").replace("\r", "\n")
        cleaned: List[str] = []
        in_pre = False
        previous_blank = False

        for line in normalized.split("\n"):
            lowered = line.lower()
            stripped = line.rstrip()
            if in_pre:
                cleaned.append(stripped)
                if "</pre>" in lowered:
                    in_pre = False
                continue

            if "<pre" in lowered and "</pre>" not in lowered:
                in_pre = True

            if not stripped:
                if previous_blank or not cleaned:
                    continue
                previous_blank = True
                cleaned.append("")
                continue

            cleaned.append(stripped)
            previous_blank = False

        while cleaned and cleaned[-1] == "":
            cleaned.pop()

        return "\n".join(cleaned) + "\n"


__all__ = ["FragmentLinter"]
