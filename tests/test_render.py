"""Tests for tree reconstruction and ASCII rendering."""

import pytest

from repotreelib import (
    AllRepositoriesTreeResponse,
    RepositoryTreeResult,
    Stats,
    TreeItem,
    build_all,
    build_node_graph,
    format_all_repositories,
    format_repository_tree,
)
from repotreelib.render import EMPTY_NOTICE, sort_items
from repotreelib.testing import InMemoryListingClient


def item(path, is_folder=False):
    return TreeItem(path.rsplit("/", 1)[-1], path, is_folder, path.count("/"))


SAMPLE = [
    item("/src", True),
    item("/src/index.ts"),
    item("/README.md"),
]


class TestBuildNodeGraph:

    def test_children_attach_to_parent_folders(self):
        graph = build_node_graph(SAMPLE)

        assert len(graph) == 3
        assert sorted(graph.root.children) == ["/README.md", "/src"]
        assert graph.get("/src").children == ["/src/index.ts"]

    def test_missing_parent_falls_back_to_root(self):
        graph = build_node_graph([item("/a/b/c.txt")])
        assert graph.root.children == ["/a/b/c.txt"]

    def test_duplicate_paths_attach_once(self):
        graph = build_node_graph([item("/a.txt"), item("/a.txt")])
        assert graph.root.children == ["/a.txt"]

    def test_children_sorted_folders_first_then_name(self):
        graph = build_node_graph([item("/b.txt"), item("/z", True), item("/a", True)])
        assert [c.name for c in graph.children(graph.root)] == ["a", "z", "b.txt"]


class TestFormatRepositoryTree:

    def test_sample_tree(self):
        output = format_repository_tree("r", SAMPLE, Stats(directories=1, files=2))

        assert output == (
            "r/\n"
            "  |-- src/\n"
            "  |   `-- index.ts\n"
            "  `-- README.md\n"
            "1 directories, 2 files\n"
        )

    def test_output_independent_of_item_order(self):
        stats = Stats(1, 2)
        expected = format_repository_tree("r", SAMPLE, stats)
        assert format_repository_tree("r", list(reversed(SAMPLE)), stats) == expected

    def test_nested_continuation_indentation(self):
        items = [
            item("/a", True),
            item("/a/inner", True),
            item("/a/inner/deep.txt"),
            item("/a/x.txt"),
            item("/b", True),
            item("/b/y.txt"),
        ]
        output = format_repository_tree("repo", items, Stats(3, 3))

        assert output.splitlines() == [
            "repo/",
            "  |-- a/",
            "  |   |-- inner/",
            "  |   |   `-- deep.txt",
            "  |   `-- x.txt",
            "  `-- b/",
            "      `-- y.txt",
            "3 directories, 3 files",
        ]

    def test_error_replaces_tree(self):
        output = format_repository_tree("repo3", [], Stats(), "No default branch found")
        assert output == "repo3/\n  (No default branch found)\n0 directories, 0 files\n"

    def test_empty_repository_notice(self):
        output = format_repository_tree("empty", [], Stats())
        assert output == f"empty/\n  {EMPTY_NOTICE}\n0 directories, 0 files\n"

    def test_footer_uses_given_stats_verbatim(self):
        output = format_repository_tree("r", SAMPLE, Stats(directories=7, files=42))
        assert output.endswith("7 directories, 42 files\n")

    def test_empty_folder_still_rendered(self):
        output = format_repository_tree("r", [item("/docs", True)], Stats(1, 0))
        assert "  `-- docs/\n" in output

    def test_names_ordered_ignoring_case(self):
        items = [item("/README.md"), item("/package.json"), item("/Src", True), item("/lib", True)]
        output = format_repository_tree("r", items, Stats(2, 2))

        assert output.splitlines()[1:5] == [
            "  |-- lib/",
            "  |-- Src/",
            "  |-- package.json",
            "  `-- README.md",
        ]


class TestSortItems:

    def test_level_then_folders_then_path(self):
        ordered = sort_items([item("/z.txt"), item("/src/a.ts"), item("/src", True), item("/a.txt")])
        assert [i.path for i in ordered] == ["/src", "/a.txt", "/z.txt", "/src/a.ts"]


class TestFormatAllRepositories:

    def test_blocks_separated_by_blank_line(self):
        response = AllRepositoriesTreeResponse([
            RepositoryTreeResult("one", [item("/a.txt")], Stats(0, 1)),
            RepositoryTreeResult.failed("two", "No default branch found"),
        ])
        assert format_all_repositories(response) == (
            "one/\n"
            "  `-- a.txt\n"
            "0 directories, 1 files\n"
            "\n"
            "two/\n"
            "  (No default branch found)\n"
            "0 directories, 0 files\n"
        )

    @pytest.mark.asyncio
    async def test_leveled_and_full_render_identically(self):
        client = InMemoryListingClient()
        client.add_repository("r", "repo", ["/README.md", "/src/index.ts", "/src/lib/util.ts"])

        full = await build_all(client, "p", depth=0)
        leveled = await build_all(client, "p", depth=5)

        assert format_all_repositories(full) == format_all_repositories(leveled)
