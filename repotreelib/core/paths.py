"""Path helpers for repository items.

Repository paths are opaque strings rooted at ``/``, e.g. ``/src/index.ts``.
The level of an item is the number of segments below the root, so
``/README.md`` is level 1 and ``/src/utils/helper.ts`` is level 3.
"""

SEPARATOR = '/'
ROOT_PATH = '/'


def level_of(path: str) -> int:
    """Compute the nesting level of a path.

    A single leading separator is stripped; paths without one are treated
    as already relative.

    Args:
        path: Repository path

    Returns:
        Number of non-empty segments (0 for the root itself)
    """
    if path.startswith(SEPARATOR):
        path = path[1:]
    return len([segment for segment in path.split(SEPARATOR) if segment])


def name_of(path: str) -> str:
    """Last segment of a path (``/src/index.ts`` -> ``index.ts``)."""
    return path.rsplit(SEPARATOR, 1)[-1]


def parent_path(path: str) -> str:
    """Path of the containing folder.

    Root-level items map to the empty string, which is the path of the
    synthetic root node used when rendering.
    """
    index = path.rfind(SEPARATOR)
    if index <= 0:
        return ''
    return path[:index]
