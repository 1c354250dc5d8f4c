"""Record source that reads a Calibre library through ``calibredb``.

Every call spawns ``calibredb --with-library <library> list ...`` and
decodes its ``--for-machine`` JSON output. No shell is involved and each
call is bounded by a timeout.
"""

import json
import subprocess
from pathlib import Path

from bookdedupe.exceptions import SourceError
from bookdedupe.models import BookRecord
from bookdedupe.parse.json_records import parse_records

__all__ = [
    "DEFAULT_CALIBREDB_COMMAND",
    "DEFAULT_TIMEOUT_SECONDS",
    "DUPLICATE_FIELDS",
    "CalibreDBSource",
]

DEFAULT_CALIBREDB_COMMAND = "calibredb"
DEFAULT_TIMEOUT_SECONDS = 15.0
DUPLICATE_FIELDS = "id,title,authors,identifiers,formats"


class CalibreDBSource:
    """Record source backed by the ``calibredb`` command line tool.

    Parameters
    ----------
    library_path : Path | str
        Calibre library directory (or a library server URL).
    command : str, optional
        calibredb executable, by default ``"calibredb"``.
    timeout : float, optional
        Per-call timeout in seconds, by default 15.
    """

    def __init__(
        self,
        library_path: Path | str,
        command: str = DEFAULT_CALIBREDB_COMMAND,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.library_path = str(library_path)
        self.command = command
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"CalibreDBSource({self.library_path!r}, command={self.command!r})"

    def list_args(self, search: str | None = None) -> list[str]:
        """Build the full argument vector for a ``list`` call."""
        args = [
            self.command,
            "--with-library",
            self.library_path,
            "list",
            "--fields",
            DUPLICATE_FIELDS,
        ]
        if search:
            args.extend(["--search", search])
        args.append("--for-machine")
        return args

    def run(self, args: list[str]) -> str:
        """Run calibredb and return its trimmed standard output.

        Raises
        ------
        SourceError
            If the executable is missing, times out, or exits non-zero.
        """
        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise SourceError(f"calibredb executable not found: {self.command}", command=args) from e
        except subprocess.TimeoutExpired as e:
            raise SourceError(
                f"calibredb timed out after {int(self.timeout * 1000)}ms", command=args
            ) from e
        except UnicodeDecodeError as e:
            raise SourceError(f"calibredb output is not valid UTF-8: {e}", command=args) from e

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            message = stderr or f"calibredb exited with code {completed.returncode}"
            raise SourceError(message, command=args, stderr=stderr or None)

        return (completed.stdout or "").strip()

    def _fetch(self, search: str | None = None) -> list[BookRecord]:
        args = self.list_args(search)
        output = self.run(args)
        if not output:
            return []
        try:
            payload = json.loads(output)
        except json.JSONDecodeError as e:
            raise SourceError(f"Unparsable calibredb output: {e}", command=args) from e
        return parse_records(payload, source=self.command)

    def fetch_all_records(self) -> list[BookRecord]:
        """Return every book in the library, in calibredb's output order."""
        return self._fetch()

    def fetch_record_by_id(self, book_id: int) -> BookRecord | None:
        """Return the book with *book_id*, or None if the library has none."""
        records = self._fetch(search=f"id:{book_id}")
        return records[0] if records else None
