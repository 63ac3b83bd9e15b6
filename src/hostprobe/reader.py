"""Plain-text readers for /proc style status files."""

from pathlib import Path

from hostprobe.errors import NotFound, SourceUnavailable


class StatusLineReader:
    """
    Reads small kernel text files fresh on every call.

    Nothing is cached: the files describe live system state. Every OSError is
    re-raised as SourceUnavailable so callers only deal with probe errors.
    """

    def read_all(self, path: str | Path) -> str:
        """Return the full text of ``path``."""
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SourceUnavailable(f"Could not read {path}: {exc.strerror or exc}") from exc

    def read_line(self, path: str | Path, index: int) -> str:
        """Return the newline-delimited record at zero-based ``index``."""
        lines = self.read_all(path).split("\n")
        if index < 0 or index >= len(lines):
            raise NotFound(f"{path} has no line {index}")
        return lines[index]

    def find_line(self, path: str | Path, label: str) -> str:
        """Return the first line of ``path`` that starts with ``label``."""
        for line in self.read_all(path).splitlines():
            if line.startswith(label):
                return line
        raise NotFound(f"No {label} line found in {path}")


def field_value(line: str) -> str:
    """Return the text after the label of a ``Label:<ws>value`` line."""
    return line.partition(":")[2].strip()
