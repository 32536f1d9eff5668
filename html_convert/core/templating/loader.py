"""
Template Loader
===============

Read HTML sources from disk and substitute literal ``{{key}}`` placeholders.
Substitution is plain string replacement: no expressions, no escaping and no
recursive expansion of inserted values.
"""

from typing import Dict, List, Mapping, Optional, Tuple, Union
from pathlib import Path
import os

import aiofiles

from html_convert.exceptions import ReadError

PathLike = Union[str, os.PathLike]


def placeholder(key: str) -> str:
    """Return the marker token for a substitution key."""
    return "{{" + key + "}}"


def resolve_source_path(location: PathLike) -> Path:
    """Resolve a source location to an absolute path."""
    return Path(location).expanduser().resolve()


async def read_source(location: PathLike, encoding: str = "utf-8") -> str:
    """
    Read an HTML source file as text.

    Args:
        location: Path to the HTML file, relative paths resolve against the CWD
        encoding: Text encoding of the file

    Returns:
        The full file content

    Raises:
        ReadError: If the file is missing, unreadable, or not valid in ``encoding``
    """
    path = resolve_source_path(location)
    try:
        async with aiofiles.open(path, mode="r", encoding=encoding) as source:
            return await source.read()
    except UnicodeDecodeError as e:
        raise ReadError(f"Cannot decode {path} as {encoding}: {e}") from e
    except LookupError as e:
        raise ReadError(f"Unknown encoding {encoding!r}: {e}") from e
    except OSError as e:
        raise ReadError(f"Cannot read {path}: {e.strerror or e}") from e


def apply_substitutions(text: str, substitutions: Mapping[str, str]) -> str:
    """
    Replace the first occurrence of each ``{{key}}`` marker with its value.

    Markers are located in the original text only, so values that contain
    markers are inserted verbatim. Keys without a marker are ignored and
    markers without a key are left untouched.
    """
    if not substitutions:
        return text

    spans: List[Tuple[int, int, str]] = []
    for key, value in substitutions.items():
        marker = placeholder(key)
        start = text.find(marker)
        # Keys claim spans in mapping order; skip matches overlapping an earlier claim
        while start != -1 and any(
            start < claimed_end and claimed_start < start + len(marker)
            for claimed_start, claimed_end, _ in spans
        ):
            start = text.find(marker, start + 1)
        if start == -1:
            continue
        spans.append((start, start + len(marker), str(value)))

    pieces: List[str] = []
    cursor = 0
    for start, end, value in sorted(spans, key=lambda span: span[0]):
        pieces.append(text[cursor:start])
        pieces.append(value)
        cursor = end
    pieces.append(text[cursor:])

    return "".join(pieces)


async def load_template(
    location: PathLike, encoding: str = "utf-8", substitutions: Optional[Dict[str, str]] = None
) -> str:
    """Read an HTML source and apply substitutions in one step."""
    text = await read_source(location, encoding)
    return apply_substitutions(text, substitutions or {})
