"""ASCII rendering of repository trees.

A flat TreeItem list is rebuilt into a node graph keyed by path and then
rendered depth first::

    my-repo/
      |-- src/
      |   `-- index.ts
      `-- README.md
    1 directories, 2 files

The footer always shows the stats passed in, not a recount of what was
rendered.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .core.node import AllRepositoriesTreeResponse, Stats, TreeItem
from .core.paths import parent_path

ROOT_KEY = ''
EMPTY_NOTICE = "(Repository is empty or default branch not found)"

BRANCH = '|-- '
LAST_BRANCH = '`-- '
PIPE_INDENT = '|   '
SPACE_INDENT = '    '
BASE_INDENT = '  '


@dataclass
class TreeNode:
    """Render-only node; children are referenced by path."""

    name: str
    path: str
    is_folder: bool
    children: List[str] = field(default_factory=list)


class NodeGraph:
    """Nodes of one render call, indexed by path.

    The synthetic root has the empty path. Nodes whose parent folder is
    not among the items hang off the root.
    """

    def __init__(self):
        self.nodes: Dict[str, TreeNode] = {
            ROOT_KEY: TreeNode(name='', path=ROOT_KEY, is_folder=True)
        }

    @property
    def root(self) -> TreeNode:
        return self.nodes[ROOT_KEY]

    def __len__(self) -> int:
        return len(self.nodes) - 1

    def __contains__(self, path: str) -> bool:
        return path in self.nodes

    def get(self, path: str) -> Optional[TreeNode]:
        return self.nodes.get(path)

    def children(self, node: TreeNode) -> List[TreeNode]:
        """Children of a node, folders first then by name ignoring case."""
        kids = [self.nodes[path] for path in node.children]
        return sorted(
            kids, key=lambda child: (not child.is_folder, child.name.casefold(), child.name)
        )


def sort_items(items: Iterable[TreeItem]) -> List[TreeItem]:
    """Sort by level, then folders first, then by path ignoring case."""
    return sorted(
        items,
        key=lambda item: (item.level, not item.is_folder, item.path.casefold(), item.path)
    )


def build_node_graph(items: Iterable[TreeItem]) -> NodeGraph:
    """Rebuild the parent/child structure of a flat item list.

    Args:
        items: Tree items in any order

    Returns:
        NodeGraph rooted at the empty path
    """
    graph = NodeGraph()
    ordered = [item for item in items if item.path not in ('', '/')]

    for item in ordered:
        if item.path not in graph.nodes:
            graph.nodes[item.path] = TreeNode(
                name=item.name, path=item.path, is_folder=item.is_folder
            )

    attached = set()
    for item in ordered:
        if item.path in attached:
            continue
        attached.add(item.path)
        parent = graph.get(parent_path(item.path)) or graph.root
        parent.children.append(item.path)

    return graph


def _render_children(graph: NodeGraph, node: TreeNode, indent: str, lines: List[str]) -> None:
    children = graph.children(node)
    for index, child in enumerate(children):
        is_last = index == len(children) - 1
        connector = LAST_BRANCH if is_last else BRANCH
        suffix = '/' if child.is_folder else ''
        lines.append(f"{indent}{connector}{child.name}{suffix}\n")

        if child.children:
            child_indent = SPACE_INDENT if is_last else PIPE_INDENT
            _render_children(graph, child, indent + child_indent, lines)


def format_stats(stats: Stats) -> str:
    return f"{stats.directories} directories, {stats.files} files\n"


def format_repository_tree(
    repository_name: str,
    items: List[TreeItem],
    stats: Stats,
    error: Optional[str] = None
) -> str:
    """Render one repository as an ASCII tree.

    Args:
        repository_name: Name shown on the first line
        items: Flat tree items (any order)
        stats: Counts shown verbatim in the footer
        error: Repository-level error, rendered instead of the tree

    Returns:
        Rendered text, newline terminated
    """
    lines = [f"{repository_name}/\n"]

    if error:
        lines.append(f"{BASE_INDENT}({error})\n")
    elif not items:
        lines.append(f"{BASE_INDENT}{EMPTY_NOTICE}\n")
    else:
        graph = build_node_graph(sort_items(items))
        _render_children(graph, graph.root, BASE_INDENT, lines)

    lines.append(format_stats(stats))
    return ''.join(lines)


def format_all_repositories(response: AllRepositoriesTreeResponse) -> str:
    """Render every repository of a response, separated by blank lines."""
    blocks = [
        format_repository_tree(result.name, result.tree, result.stats, result.error)
        for result in response.repositories
    ]
    return '\n'.join(blocks)
