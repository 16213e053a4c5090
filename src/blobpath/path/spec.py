"""Parsing of user-supplied path strings into container and key parts."""

from __future__ import annotations

import re
from dataclasses import dataclass

from blobpath.errors import BlobPathError, ErrorKind

SEPARATOR = "/"
ACCESS_POINT_SEGMENT = ":accesspoint/"
ACCESS_POINT_NORMALIZED = ":accesspoint:"

_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


def is_qualified(path: str) -> bool:
    """True for scheme-qualified ("s3://...") or absolute ("/...") paths."""
    return path.startswith(SEPARATOR) or _SCHEME_PATTERN.match(path) is not None


@dataclass(frozen=True)
class PathSpec:
    """Canonical {container, key, full_key} view of a path.

    Attributes:
        container: Top-level namespace the key lives under.
        key: Immediate child segment with a trailing separator, or "" when
            the path names only the container.
        full_key: Complete remainder after the container with a trailing
            separator, or None when the path names only the container.
    """

    container: str
    key: str = ""
    full_key: str | None = None

    @classmethod
    def from_path(cls, path: str) -> PathSpec:
        """Parse a scheme-qualified, absolute or bare path.

        Examples:
            "s3://bucket/a/b/c" -> container "bucket", key "a/", full_key "a/b/c/"
            "/bucket/a"         -> container "bucket", key "a/", full_key "a/"
            "az://bucket"       -> container "bucket", key "", full_key None

        Raises:
            BlobPathError: INVALID_PATH if no container name can be parsed.
        """
        normalized = _SCHEME_PATTERN.sub("", str(path), count=1)
        normalized = normalized.replace(ACCESS_POINT_SEGMENT, ACCESS_POINT_NORMALIZED)
        parts = [part for part in normalized.split(SEPARATOR) if part]

        if not parts:
            raise BlobPathError(ErrorKind.INVALID_PATH, detail="No container name found.", path=path)

        container = parts[0]
        if SEPARATOR in container:
            raise BlobPathError(
                ErrorKind.INVALID_PATH,
                detail=f"{container} is not a valid container name.",
                path=path,
            )

        remainder = parts[1:]
        if not remainder:
            return cls(container=container)

        key = remainder[0] + SEPARATOR
        full_key = SEPARATOR.join(remainder) + SEPARATOR
        return cls(container=container, key=key, full_key=full_key)

    @property
    def object_key(self) -> str:
        """Full key without its trailing separator, as used to address one object."""
        if self.full_key is None:
            return ""
        return self.full_key.rstrip(SEPARATOR)

    @property
    def segments(self) -> list[str]:
        """Key segments below the container."""
        return [part for part in self.object_key.split(SEPARATOR) if part]

    def __str__(self) -> str:
        if not self.object_key:
            return f"{SEPARATOR}{self.container}"
        return f"{SEPARATOR}{self.container}{SEPARATOR}{self.object_key}"
