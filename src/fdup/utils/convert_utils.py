"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import re
from typing import Iterable, List, Tuple, Union

# Pre-compiled regex pattern (performance optimization)
_PATTERN_DIGITS = re.compile(r'(\d+)')


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.5KB, 3.2MB).
        """
        if size_bytes < 0:
            return "0B"

        units = ["B", "KB", "MB", "GB", "TB", "PB"]
        for unit in units:
            if size_bytes < 1024:
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def with_commas(value: int) -> str:
        """1234567 → '1,234,567'"""
        return f"{value:,}"

    @staticmethod
    def count_noun(count: int, singular: str, plural: str) -> str:
        """Formats a count with the noun agreeing in number, e.g. '1 file', '1,024 files'."""
        return f"{ConvertUtils.with_commas(count)} {singular if count == 1 else plural}"

    @staticmethod
    def natural_key(text: str) -> Tuple[Tuple[Union[str, Tuple[int, int]], ...], str]:
        """
        Sort key that compares embedded numbers by value and text case-insensitively.

        Examples:
            "file2" < "file10"
            "File1" < "file1b"
        """
        parts = _PATTERN_DIGITS.split(text)
        key = []
        for i, part in enumerate(parts):
            if i % 2:
                # Tie-break equal values by digit count so "01" and "1" stay distinct
                key.append((int(part), len(part)))
            else:
                key.append(part.casefold())
        return tuple(key), text

    @staticmethod
    def natural_sorted(values: Iterable[str]) -> List[str]:
        """Returns `values` sorted in human-friendly, numeric-aware order."""
        return sorted(values, key=ConvertUtils.natural_key)
