"""Resolution of golden keys to file-system paths.

Golden keys are URI references (``"goldens/button.png"``) interpreted
relative to the directory of the test that owns them.  Base directories are
carried around as ``file:`` URIs in directory form (trailing ``/``) and only
converted to native paths at the last moment, using the rules of a
:class:`~golden_compare.models.enums.PathStyle`.  Passing an explicit style
lets tests exercise Windows path handling on a POSIX host and vice versa.
"""

from __future__ import annotations

import logging
import ntpath
import os
import posixpath
import re
from pathlib import PurePath
from types import ModuleType
from urllib.parse import quote, unquote, urlsplit

from golden_compare.models.enums import PathStyle

logger = logging.getLogger(__name__)

GoldenKey = str | os.PathLike[str]

_WINDOWS_DRIVE_RE = re.compile(r"^/[A-Za-z]:")

_PATH_MODULES: dict[PathStyle, ModuleType] = {
    PathStyle.POSIX: posixpath,
    PathStyle.WINDOWS: ntpath,
    PathStyle.URL: posixpath,
}


def resolve_style(path_style: PathStyle | None = None) -> PathStyle:
    """Return *path_style*, or the style of the running platform when ``None``."""
    if path_style is not None:
        return PathStyle(path_style)
    return PathStyle.WINDOWS if os.name == "nt" else PathStyle.POSIX


def as_key(golden: GoldenKey) -> str:
    """Return the URI-reference string form of a golden key."""
    if isinstance(golden, str):
        return golden
    return PurePath(os.fspath(golden)).as_posix()


# ---------------------------------------------------------------------------
# URI <-> path conversion
# ---------------------------------------------------------------------------


def from_uri(uri: str, path_style: PathStyle | None = None) -> str:
    """Convert a ``file:`` URI or relative URI reference to a native path.

    Raises:
        ValueError: If *uri* has a scheme other than ``file``, or names a
            remote host under the POSIX style.
    """
    style = resolve_style(path_style)
    if style is PathStyle.URL:
        return uri

    parts = urlsplit(uri)
    if parts.scheme not in ("", "file"):
        raise ValueError(f"Uri {uri!r} must have scheme 'file:'.")
    path = unquote(parts.path)

    if style is PathStyle.WINDOWS:
        if parts.netloc and parts.netloc != "localhost":
            # UNC share: file://server/share/x -> \\server\share\x
            return "\\\\" + parts.netloc + path.replace("/", "\\")
        if _WINDOWS_DRIVE_RE.match(path):
            path = path[1:]
        return path.replace("/", "\\")

    if parts.netloc not in ("", "localhost"):
        raise ValueError(f"Uri {uri!r} must not name a host for the POSIX path style.")
    return path


def to_uri(path: str, path_style: PathStyle | None = None) -> str:
    """Convert a native path to a ``file:`` URI, or a relative URI reference.

    A trailing separator on *path* is kept as a trailing ``/``.
    """
    style = resolve_style(path_style)
    if style is PathStyle.URL:
        return path

    if style is PathStyle.WINDOWS:
        if path.startswith("\\\\"):
            host, _, rest = path[2:].partition("\\")
            return f"file://{host}/" + quote(rest.replace("\\", "/"))
        drive, _ = ntpath.splitdrive(path)
        posix_form = path.replace("\\", "/")
        if drive and ntpath.isabs(path):
            return "file:///" + quote(posix_form, safe="/:")
        return quote(posix_form)

    if posixpath.isabs(path):
        return "file://" + quote(path)
    return quote(path)


def _as_native(location: GoldenKey, style: PathStyle) -> str:
    """Accept a ``file:`` URI, a native path string, or a ``PathLike``."""
    if not isinstance(location, str):
        return os.fspath(location)
    if style is PathStyle.URL or location.startswith("file:"):
        return from_uri(location, style)
    return location


# ---------------------------------------------------------------------------
# Public resolution API
# ---------------------------------------------------------------------------


def resolve_base(test_file: GoldenKey, path_style: PathStyle | None = None) -> str:
    """Return the directory containing *test_file* as a directory-form URI.

    Example::

        >>> resolve_base("/a/b/test_button.py", PathStyle.POSIX)
        'file:///a/b/'
    """
    style = resolve_style(path_style)
    module = _PATH_MODULES[style]
    separator = "/" if style is PathStyle.URL else module.sep

    directory = module.dirname(_as_native(test_file, style))
    if not directory:
        directory = module.curdir
    if not directory.endswith(separator):
        directory += separator
    return to_uri(directory, style)


def apply_version(key: GoldenKey, version: int | None) -> str:
    """Splice *version* into the golden key's filename before its extension.

    The key is split on *every* occurrence of its extension token and the
    pieces are joined back together before ``.<version><extension>`` is
    appended, so ``"a.png.png"`` becomes ``"a.1.png"`` for version 1.
    Golden files generated by earlier releases depend on this.

    Raises:
        ValueError: If *version* is negative.
    """
    key_string = as_key(key)
    if version is None:
        return key_string
    if version < 0:
        raise ValueError(f"Golden file version must be non-negative, got {version}")

    extension = posixpath.splitext(key_string)[1]
    if not extension:
        return f"{key_string}.{version}"
    return "".join(key_string.split(extension)) + f".{version}{extension}"


def to_file_path(
    base: str,
    golden: GoldenKey,
    path_style: PathStyle | None = None,
) -> str:
    """Join the base directory URI and the key's path component.

    Query and fragment parts of the key are ignored.  An absolute key
    replaces the base directory, following the join rules of the style.
    """
    style = resolve_style(path_style)
    module = _PATH_MODULES[style]

    key_path = urlsplit(as_key(golden)).path
    if style is PathStyle.URL:
        relative = key_path
    elif style is PathStyle.WINDOWS:
        relative = unquote(key_path).replace("/", "\\")
    else:
        relative = unquote(key_path)

    resolved = module.join(from_uri(base, style), relative)
    logger.debug("Resolved golden %r under %s to %s", golden, base, resolved)
    return resolved
