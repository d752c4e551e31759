"""Navigation tree builder.

Builds the sidebar tree from the flat document enumeration. The tree is
rebuilt for every render and annotated with the open state relative to the
route being rendered.
"""

import re
from dataclasses import dataclass, field
from typing import TypedDict

from staticdocs.core.files import DocumentFile, DocumentFileProvider
from staticdocs.core.types import URLPath

_DIGITS = re.compile(r"(\d+)")


class NavNodeDict(TypedDict, total=False):
    """Dictionary representation of a navigation node."""

    title: str
    path: str
    isOpen: bool
    children: list["NavNodeDict"]


@dataclass
class NavNode:
    """Sidebar entry: a page (has a path) or a grouping folder.

    ``children`` is None for document leaves and a list for folders, even
    when the folder holds nothing but its own index page.
    """

    title: str
    path: URLPath | None = None
    children: list["NavNode"] | None = None
    is_open: bool = False

    @property
    def is_folder(self) -> bool:
        return self.children is not None

    def to_dict(self) -> NavNodeDict:
        """Convert to dictionary for JSON serialization."""
        result: NavNodeDict = {"title": self.title}
        if self.path is not None:
            result["path"] = self.path
        result["isOpen"] = self.is_open
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass
class _Folder:
    """Directory level while the tree is under construction."""

    title: str
    path: URLPath | None = None
    folders: dict[str, "_Folder"] = field(default_factory=dict)
    leaves: list[NavNode] = field(default_factory=list)

    def folder(self, segment: str) -> "_Folder":
        if segment not in self.folders:
            self.folders[segment] = _Folder(title=format_title(segment))
        return self.folders[segment]

    def to_nodes(self) -> list[NavNode]:
        nodes = list(self.leaves)
        for segment in sorted(self.folders):
            folder = self.folders[segment]
            nodes.append(
                NavNode(title=folder.title, path=folder.path, children=folder.to_nodes())
            )
        return nodes


def format_title(slug: str) -> str:
    """Turn a file or directory name into a title ("setup-guide" -> "Setup guide")."""
    text = slug.replace("-", " ").replace("_", " ")
    return text[:1].upper() + text[1:]


def natural_key(text: str) -> list[str | int]:
    """Case-insensitive natural sort key ("item2" < "item10")."""
    parts = _DIGITS.split(text.lower())
    return [int(part) if index % 2 else part for index, part in enumerate(parts)]


def sort_nodes(nodes: list[NavNode]) -> None:
    """Sort one level in place and recurse into folders.

    Documents come before folders; each group is ordered by title, with the
    path as tie-breaker. Folders without a path keep the order of their
    directory names.
    """
    nodes.sort(
        key=lambda node: (
            node.is_folder,
            natural_key(node.title),
            natural_key(node.path or ""),
        )
    )
    for node in nodes:
        if node.children:
            sort_nodes(node.children)


def mark_open(node: NavNode, current: str | None) -> bool:
    """Set ``is_open`` on a node and its descendants.

    A node is open when it is the current page or contains it.

    Returns:
        The node's open state
    """
    is_open = bool(current) and node.path == current
    for child in node.children or []:
        # Every child is visited, so no short-circuit here
        if mark_open(child, current):
            is_open = True
    node.is_open = is_open
    return is_open


class NavigationTreeBuilder:
    """Builds the navigation tree from the documents under the docs root."""

    def __init__(self, provider: DocumentFileProvider) -> None:
        self._provider = provider

    @property
    def provider(self) -> DocumentFileProvider:
        return self._provider

    def build(self, current: str | None = None) -> list[NavNode]:
        """Build the full navigation tree.

        Args:
            current: Endpoint of the page being rendered; None or "" leaves
                every node closed

        Returns:
            Ordered list of root-level nodes

        Raises:
            RootNotFoundError: If the docs root does not exist
        """
        root = _Folder(title="")
        for document in self._provider.iter_files():
            _add_document(root, document)

        nodes = root.to_nodes()
        sort_nodes(nodes)
        for node in nodes:
            mark_open(node, current)
        return nodes


def _add_document(root: _Folder, document: DocumentFile) -> None:
    current = root
    for segment in document.relative_dir:
        current = current.folder(segment)

    if document.is_index:
        # The root index page is the home page, not a sidebar entry
        if document.relative_dir:
            current.path = URLPath(f"/{document.relative_dir_path}")
        return

    prefix = f"/{document.relative_dir_path}" if document.relative_dir else ""
    current.leaves.append(
        NavNode(
            title=format_title(document.name),
            path=URLPath(f"{prefix}/{document.name}"),
        )
    )
