"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/filters.py
Filename eligibility by extension allow-list.
"""

from typing import Iterable, List, Optional


def normalize_extensions(values: Iterable[str], case_sensitive: bool = False) -> List[str]:
    """
    Normalize raw extension entries into suffixes usable for matching.

    Each entry may itself hold several comma-separated values. Entries are stripped,
    lower-cased unless `case_sensitive`, prefixed with a dot when missing, and
    empty or bare "." entries are dropped.

    Examples:
        ["jpg", ".PNG"]        → [".jpg", ".png"]
        ["txt, md", "", "."]   → [".txt", ".md"]
    """
    normalized = []
    for entry in values:
        for ext in entry.split(","):
            ext = ext.strip()
            if not ext:
                continue
            if not case_sensitive:
                ext = ext.lower()
            if not ext.startswith("."):
                ext = f".{ext}"
            if ext != ".":
                normalized.append(ext)
    return normalized


class ExtensionFilter:
    """
    Decides which filenames are eligible for hashing.
    With no extensions configured every name is accepted.
    """

    def __init__(self, extensions: Optional[Iterable[str]] = None, case_sensitive: bool = False):
        self.case_sensitive = case_sensitive
        self.extensions = normalize_extensions(extensions or [], case_sensitive)

    def accept(self, name: str) -> bool:
        if not self.extensions:
            return True
        if not self.case_sensitive:
            name = name.lower()
        return any(name.endswith(ext) for ext in self.extensions)

    def __repr__(self):
        return f"<ExtensionFilter extensions={self.extensions}, case_sensitive={self.case_sensitive}>"
