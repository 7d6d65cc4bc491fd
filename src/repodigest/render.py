"""ASCII rendering of a digest directory tree.

Files are listed before folders at every level, each group sorted by name,
independent of the discovery order stored in the tree.
"""

from __future__ import annotations

from repodigest.domain import DirectoryNode

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "

TREE_TITLE = "Directory structure:"
NO_FILES_MESSAGE = "(no files matched)"


def render_directory_tree(root: DirectoryNode | None) -> str:
    """Render a directory tree as text.

    Args:
        root: Root node of the digest tree, or None when nothing matched.

    Returns:
        Multi-line string starting with "Directory structure:".

    Example:
        Directory structure:
        └── project/
            ├── README.md
            └── src/
                └── main.py
    """
    if root is None:
        return f"{TREE_TITLE}\n{NO_FILES_MESSAGE}"

    lines = [TREE_TITLE, f"{LAST_BRANCH}{root.name}/"]
    _render_children(root, SPACE_PREFIX, lines)
    return "\n".join(lines)


def _render_children(node: DirectoryNode, prefix: str, lines: list[str]) -> None:
    files = sorted(node.file_names)
    folders = sorted(node.subfolders, key=lambda folder: folder.name)
    total = len(files) + len(folders)

    for index, name in enumerate(files):
        branch = LAST_BRANCH if index == total - 1 else BRANCH
        lines.append(f"{prefix}{branch}{name}")

    for offset, folder in enumerate(folders):
        is_last = len(files) + offset == total - 1
        branch = LAST_BRANCH if is_last else BRANCH
        lines.append(f"{prefix}{branch}{folder.name}/")
        child_prefix = prefix + (SPACE_PREFIX if is_last else PIPE_PREFIX)
        _render_children(folder, child_prefix, lines)
