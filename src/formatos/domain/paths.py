from __future__ import annotations

from dataclasses import dataclass

SEPARATOR = "/"
ROOT = ""
ROOT_LABEL = "Root"


@dataclass(frozen=True)
class Breadcrumb:
    label: str
    prefix: str


def normalize_path(path: str | None) -> str:
    """
    Return the canonical form of a slash-delimited path.

    Leading and trailing slashes are dropped and empty or blank segments
    collapse. Other segments are kept verbatim, spaces included. The root is "".

    Examples:
        >>> normalize_path("/docs//2024/")
        'docs/2024'
        >>> normalize_path("  ")
        ''
    """
    if not path:
        return ROOT
    return SEPARATOR.join(split_segments(path))


def split_segments(path: str | None) -> list[str]:
    if not path:
        return []
    return [segment for segment in path.split(SEPARATOR) if segment.strip()]


def join_path(parent: str, name: str) -> str:
    """
    Append a child name to a parent path.

    Example:
        >>> join_path("", "docs")
        'docs'
        >>> join_path("docs", "2024")
        'docs/2024'
    """
    return normalize_path(f"{parent}{SEPARATOR}{name}")


def parent_path(path: str) -> str:
    segments = split_segments(path)
    return SEPARATOR.join(segments[:-1])


def prefix_of(path: str, depth: int) -> str:
    """Return the first ``depth`` segments of ``path`` joined by slashes."""
    if depth < 0:
        raise ValueError("depth must be non-negative")
    return SEPARATOR.join(split_segments(path)[:depth])


def last_segment(path: str) -> str:
    segments = split_segments(path)
    return segments[-1] if segments else ROOT


def breadcrumbs(path: str) -> list[Breadcrumb]:
    """
    Build the breadcrumb trail for a path, starting with the root crumb.

    Example:
        >>> [crumb.prefix for crumb in breadcrumbs("a/b")]
        ['', 'a', 'a/b']
    """
    crumbs = [Breadcrumb(label=ROOT_LABEL, prefix=ROOT)]
    segments = split_segments(path)
    for depth, segment in enumerate(segments, start=1):
        crumbs.append(Breadcrumb(label=segment, prefix=SEPARATOR.join(segments[:depth])))
    return crumbs
