"""Read and write ``.docx`` packages."""

from __future__ import annotations

import logging
import zipfile
from io import BytesIO
from pathlib import Path

from bs4 import BeautifulSoup

from wordsections.codec import decode, encode
from wordsections.exceptions import PackageError, ParseError

logger = logging.getLogger(__name__)

_ROOT_RELS = "_rels/.rels"
_OFFICE_DOCUMENT_SUFFIX = "/officeDocument"
_DEFAULT_MAIN_PART = "word/document.xml"


class PackageStore:
    """Holds the parts of a document package and swaps in the edited body part.

    All parts are read eagerly; only the main document part is ever decoded.
    Every other part is written back byte for byte.
    """

    def __init__(self, data: bytes, *, path: Path | None = None) -> None:
        self.path = path
        self._parts = _read_parts(data)
        self.main_part = _find_main_part(self._parts)

    @classmethod
    def open(cls, path: str | Path) -> PackageStore:
        """Read a package from disk.

        Raises:
            PackageError: If the file is missing or not a readable package.
        """
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as exc:
            raise PackageError(f"Unable to read package {file_path}: {exc}") from exc
        return cls(data, path=file_path)

    @property
    def part_names(self) -> list[str]:
        return list(self._parts)

    def read_part(self, name: str) -> bytes:
        try:
            return self._parts[name]
        except KeyError as exc:
            raise PackageError(f"Package has no part named {name!r}") from exc

    def load(self) -> BeautifulSoup:
        """Decode the main document part into a markup tree."""
        try:
            return decode(self.read_part(self.main_part))
        except ParseError as exc:
            raise PackageError(f"Main document part {self.main_part!r} is unreadable: {exc}") from exc

    def to_bytes(self, tree: BeautifulSoup) -> bytes:
        """Serialize the package with ``tree`` as its main document part."""
        self._parts[self.main_part] = encode(tree)
        buffer = BytesIO()
        with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, content in self._parts.items():
                archive.writestr(name, content)
        return buffer.getvalue()

    def save(self, tree: BeautifulSoup, path: str | Path | None = None) -> Path:
        """Write the package to ``path`` (default: where it was opened from)."""
        target = Path(path) if path is not None else self.path
        if target is None:
            raise PackageError("No destination path given for an in-memory package.")
        target.write_bytes(self.to_bytes(tree))
        logger.debug("Saved package to %s", target)
        return target


def _read_parts(data: bytes) -> dict[str, bytes]:
    try:
        with zipfile.ZipFile(BytesIO(data)) as archive:
            return {
                info.filename: archive.read(info.filename)
                for info in archive.infolist()
                if not info.is_dir()
            }
    except zipfile.BadZipFile as exc:
        raise PackageError(f"Not a valid document package: {exc}") from exc


def _find_main_part(parts: dict[str, bytes]) -> str:
    """Locate the main document part through the package relationships."""
    rels = parts.get(_ROOT_RELS)
    if rels:
        soup = BeautifulSoup(rels, "xml")
        for relationship in soup.find_all("Relationship"):
            if relationship.get("Type", "").endswith(_OFFICE_DOCUMENT_SUFFIX):
                target = relationship.get("Target", "").lstrip("/")
                if target in parts:
                    return target
                logger.debug("Relationship target %r missing from package", target)
    if _DEFAULT_MAIN_PART in parts:
        return _DEFAULT_MAIN_PART
    raise PackageError("Package has no main document part.")
