"""Path mapping for user-supplied paths (CLI flags and config entries)."""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path

from .errors import PathMappingError

_WINDOWS_DRIVE_RELATIVE_RE = re.compile(r"^[A-Za-z]:[^/\\]")


def get_app_root() -> Path:
    return Path(__file__).resolve().parent


def map_path(
    raw: str,
    *,
    app_root_abs: Path | None = None,
    base_dir: Path | None = None,
) -> Path:
    """Map a user-provided path string to an absolute Path.

    Resolution rules (applied in order):
    1. Normalize to NFC and reject NUL chars.
    2. Reject Windows rooted-not-qualified forms (\\name, C:name).
    3. ``~`` expands to the home directory, ``@`` to the app package root.
    4. Absolute paths are accepted as-is.
    5. Relative paths join onto ``base_dir`` when given, otherwise fail.
    """
    if app_root_abs is None:
        app_root_abs = get_app_root()
    if not app_root_abs.is_absolute():
        raise PathMappingError("app_root_abs must be an absolute path.")

    normalized = unicodedata.normalize("NFC", raw)
    if "\0" in normalized:
        raise PathMappingError("Path contains NUL (\\0) character.")
    if _is_windows_rooted_not_fully_qualified(normalized):
        raise PathMappingError(
            "Unsupported Windows rooted-not-qualified path form "
            "(e.g. \\name or C:name)."
        )

    mapped = _map_special_prefixes(normalized, app_root_abs)

    if not mapped.is_absolute():
        if base_dir is None:
            raise PathMappingError(
                f"Relative path '{raw}' requires a base directory. "
                "Use ~ (home), @ (app root), or an absolute path."
            )
        mapped = base_dir / mapped

    return mapped.resolve(strict=False)


def _map_special_prefixes(path_text: str, app_root_abs: Path) -> Path:
    if path_text == "~" or path_text.startswith(("~/", "~\\")):
        try:
            return Path(path_text).expanduser()
        except RuntimeError as exc:
            raise PathMappingError(
                f"Failed to expand user home in path: {path_text}"
            ) from exc
    if path_text == "@" or path_text.startswith(("@/", "@\\")):
        remainder = path_text[1:].lstrip("/\\")
        segments = [segment for segment in re.split(r"[\\/]+", remainder) if segment]
        return app_root_abs.joinpath(*segments)
    return Path(path_text)


def _is_windows_rooted_not_fully_qualified(path_text: str) -> bool:
    if path_text.startswith("\\") and not path_text.startswith("\\\\"):
        return True
    return _WINDOWS_DRIVE_RELATIVE_RE.match(path_text) is not None
