"""Module: file_size_formatter.py

Date: 2026-10-19

File size formatting for media cell annotations.
Supports binary (1024) and decimal (1000) units; the table uses binary
units with the short labels (KB, MB, GB) people expect in a browser.
"""


class FileSizeFormatter:
    """File size formatter with configurable base and precision."""

    LEGACY_BINARY_UNITS = ["B", "KB", "MB", "GB"]
    BINARY_UNITS = ["B", "KiB", "MiB", "GiB"]
    DECIMAL_UNITS = ["B", "KB", "MB", "GB"]

    def __init__(self, use_binary: bool = True, use_legacy_labels: bool = True, precision: int = 1):
        """Initialize the formatter.

        Args:
            use_binary: Use 1024 as the unit step (otherwise 1000)
            use_legacy_labels: Label binary units KB/MB/GB instead of KiB/MiB/GiB
            precision: Decimal places kept before trailing zeros are stripped

        """
        self.use_binary = use_binary
        self.precision = precision
        self.base = 1024 if use_binary else 1000
        if use_binary:
            self.units = self.LEGACY_BINARY_UNITS if use_legacy_labels else self.BINARY_UNITS
        else:
            self.units = self.DECIMAL_UNITS

    def format_size(self, size_bytes: int | float) -> str:
        """Format a byte count, e.g. 1536 -> "1.5 KB", 1024 -> "1 KB"."""
        if size_bytes <= 0:
            return f"0 {self.units[0]}"

        exponent = 0
        value = float(size_bytes)
        while value >= self.base and exponent < len(self.units) - 1:
            value /= self.base
            exponent += 1

        return f"{self._strip_zeros(round(value, self.precision))} {self.units[exponent]}"

    @staticmethod
    def _strip_zeros(value: float) -> str:
        if float(value).is_integer():
            return str(int(value))
        return f"{value}".rstrip("0").rstrip(".")


_default_formatter = FileSizeFormatter()


def format_file_size(size_bytes: int | float) -> str:
    """Format a byte count with the default (binary, legacy label) formatter."""
    return _default_formatter.format_size(size_bytes)
