"""Tests for navigation tree builder."""

from pathlib import Path

import pytest

from staticdocs.core.files import DocumentFileProvider
from staticdocs.core.navigation import (
    NavigationTreeBuilder,
    NavNode,
    format_title,
    mark_open,
    natural_key,
    sort_nodes,
)
from staticdocs.errors import RootNotFoundError

from tests.conftest import write_docs


def _builder(docs_root: Path) -> NavigationTreeBuilder:
    return NavigationTreeBuilder(DocumentFileProvider(docs_root))


def _walk(nodes: list[NavNode]) -> list[NavNode]:
    result: list[NavNode] = []
    for node in nodes:
        result.append(node)
        result.extend(_walk(node.children or []))
    return result


class TestNavigationTreeBuilderBuild:
    """Tests for NavigationTreeBuilder.build()."""

    def test__missing_root__raises_root_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(RootNotFoundError):
            _builder(tmp_path / "nonexistent").build()

    def test__empty_root__returns_empty_list(self, docs_root: Path) -> None:
        assert _builder(docs_root).build() == []

    def test__root_index__is_not_a_sidebar_entry(self, docs_root: Path) -> None:
        """The home page doesn't appear in the navigation."""
        write_docs(docs_root, {"index.md": "# Home", "guide.md": "# Guide"})

        nodes = _builder(docs_root).build()

        assert [node.path for node in nodes] == ["/guide"]

    def test__root_document__has_no_directory_prefix(self, docs_root: Path) -> None:
        write_docs(docs_root, {"setup-guide.md": "# Setup"})

        (node,) = _builder(docs_root).build()

        assert node.title == "Setup guide"
        assert node.path == "/setup-guide"
        assert node.children is None

    def test__folder_with_index__gets_path(self, docs_root: Path) -> None:
        """Folder node takes its path from the index page."""
        write_docs(
            docs_root,
            {"domain-a/index.md": "# Domain", "domain-a/guide.md": "# Guide"},
        )

        (folder,) = _builder(docs_root).build()

        assert folder.title == "Domain a"
        assert folder.path == "/domain-a"
        assert folder.children is not None
        assert [(child.title, child.path) for child in folder.children] == [
            ("Guide", "/domain-a/guide"),
        ]

    def test__folder_without_index__has_no_path(self, docs_root: Path) -> None:
        """Folder without index.md is a pure grouping node."""
        write_docs(docs_root, {"group/child.md": "# Child"})

        (folder,) = _builder(docs_root).build()

        assert folder.title == "Group"
        assert folder.path is None
        assert folder.children is not None
        assert folder.children[0].path == "/group/child"

    def test__folder_with_only_subfolders__is_grouping_node(self, docs_root: Path) -> None:
        write_docs(docs_root, {"wrapper/domain/index.md": "# Domain"})

        (wrapper,) = _builder(docs_root).build()

        assert wrapper.path is None
        assert wrapper.children is not None
        (domain,) = wrapper.children
        assert domain.title == "Domain"
        assert domain.path == "/wrapper/domain"

    def test__index_after_sibling__still_sets_folder_path(self, docs_root: Path) -> None:
        """Folder path doesn't depend on the order files are found in."""
        write_docs(
            docs_root,
            {
                "topics/a.md": "",
                "topics/b.md": "",
                "topics/index.md": "",
                "topics/z.md": "",
            },
        )

        (folder,) = _builder(docs_root).build()

        assert folder.path == "/topics"
        assert folder.children is not None
        assert len(folder.children) == 3

    def test__intermediate_folders__have_no_path(self, docs_root: Path) -> None:
        """Only the folder holding index.md gets a path."""
        write_docs(docs_root, {"a/b/index.md": ""})

        (a,) = _builder(docs_root).build()

        assert a.path is None
        assert a.children is not None
        assert a.children[0].path == "/a/b"


class TestNavigationSorting:
    """Tests for navigation ordering."""

    def test__files_before_folders_then_alphabetical(self, docs_root: Path) -> None:
        write_docs(
            docs_root,
            {"zebra.md": "", "apple.md": "", "folder/index.md": ""},
        )

        nodes = _builder(docs_root).build()

        assert [node.title for node in nodes] == ["Apple", "Zebra", "Folder"]

    def test__case_insensitive_order(self, docs_root: Path) -> None:
        write_docs(docs_root, {"Zebra.md": "", "apple.md": "", "Banana.md": ""})

        nodes = _builder(docs_root).build()

        assert [node.title for node in nodes] == ["Apple", "Banana", "Zebra"]

    def test__natural_order(self, docs_root: Path) -> None:
        """Numbers sort by value, not lexically."""
        write_docs(docs_root, {"step-10.md": "", "step-2.md": "", "step-1.md": ""})

        nodes = _builder(docs_root).build()

        assert [node.path for node in nodes] == ["/step-1", "/step-2", "/step-10"]

    def test__duplicate_titles__tie_break_on_path(self, docs_root: Path) -> None:
        """Same title at one level is ordered by path."""
        write_docs(docs_root, {"my-page.md": "", "my_page.md": ""})

        nodes = _builder(docs_root).build()

        assert [node.title for node in nodes] == ["My page", "My page"]
        assert [node.path for node in nodes] == ["/my-page", "/my_page"]

    def test__duplicate_grouping_folder_titles__ordered_by_directory(
        self, docs_root: Path
    ) -> None:
        """Folders without index pages and with the same title keep directory order."""
        write_docs(docs_root, {"my_dir/b.md": "", "my-dir/a.md": ""})

        nodes = _builder(docs_root).build()

        assert [node.title for node in nodes] == ["My dir", "My dir"]
        assert [node.path for node in nodes] == [None, None]
        assert [child.path for node in nodes for child in node.children or []] == [
            "/my-dir/a",
            "/my_dir/b",
        ]

    def test__every_level_sorted_independently(self, docs_root: Path) -> None:
        write_docs(
            docs_root,
            {
                "outer/index.md": "",
                "outer/zeta.md": "",
                "outer/alpha.md": "",
                "outer/inner/index.md": "",
                "outer/inner/b.md": "",
                "outer/inner/a.md": "",
            },
        )

        (outer,) = _builder(docs_root).build()

        assert outer.children is not None
        assert [child.title for child in outer.children] == ["Alpha", "Zeta", "Inner"]
        inner = outer.children[2]
        assert inner.children is not None
        assert [child.title for child in inner.children] == ["A", "B"]


class TestNavigationOpenState:
    """Tests for open state propagation."""

    @pytest.fixture
    def docs(self, docs_root: Path) -> Path:
        write_docs(
            docs_root,
            {
                "index.md": "",
                "guide.md": "",
                "topics/index.md": "",
                "topics/setup.md": "",
                "topics/deep/nested.md": "",
                "other/page.md": "",
            },
        )
        return docs_root

    def test__no_current_route__everything_closed(self, docs: Path) -> None:
        nodes = _builder(docs).build()

        assert not any(node.is_open for node in _walk(nodes))

    def test__empty_current_route__everything_closed(self, docs: Path) -> None:
        nodes = _builder(docs).build("")

        assert not any(node.is_open for node in _walk(nodes))

    def test__current_page__opens_ancestors(self, docs: Path) -> None:
        nodes = _builder(docs).build("/topics/deep/nested")

        open_titles = {node.title for node in _walk(nodes) if node.is_open}
        assert open_titles == {"Topics", "Deep", "Nested"}

    def test__current_folder__opens_itself_only(self, docs: Path) -> None:
        nodes = _builder(docs).build("/topics")

        open_titles = {node.title for node in _walk(nodes) if node.is_open}
        assert open_titles == {"Topics"}

    def test__open_iff_self_or_descendant_open(self, docs: Path) -> None:
        """Open state holds for every node of the tree."""
        current = "/topics/setup"
        nodes = _builder(docs).build(current)

        for node in _walk(nodes):
            expected = node.path == current or any(
                child.is_open for child in node.children or []
            )
            assert node.is_open == expected

    def test__unknown_route__everything_closed(self, docs: Path) -> None:
        nodes = _builder(docs).build("/nope")

        assert not any(node.is_open for node in _walk(nodes))

    def test__each_build__returns_new_tree(self, docs: Path) -> None:
        """Trees are never shared between builds."""
        builder = _builder(docs)

        opened = builder.build("/guide")
        closed = builder.build()

        assert any(node.is_open for node in opened)
        assert not any(node.is_open for node in closed)


class TestNavNode:
    """Tests for NavNode."""

    def test__to_dict__leaf(self) -> None:
        node = NavNode(title="Guide", path="/guide")

        assert node.to_dict() == {"title": "Guide", "path": "/guide", "isOpen": False}

    def test__to_dict__grouping_folder_with_children(self) -> None:
        child = NavNode(title="Sub", path="/group/sub", is_open=True)
        node = NavNode(title="Group", children=[child], is_open=True)

        assert node.to_dict() == {
            "title": "Group",
            "isOpen": True,
            "children": [{"title": "Sub", "path": "/group/sub", "isOpen": True}],
        }

    def test__to_dict__empty_children_omitted(self) -> None:
        node = NavNode(title="Topics", path="/topics", children=[])

        assert node.is_folder
        assert "children" not in node.to_dict()


class TestHelpers:
    """Tests for title formatting and sort helpers."""

    @pytest.mark.parametrize(
        ("slug", "expected"),
        [
            ("guide", "Guide"),
            ("setup-guide", "Setup guide"),
            ("my_great_guide", "My great guide"),
            ("api-user_guide", "Api user guide"),
            ("", ""),
        ],
    )
    def test__format_title(self, slug: str, expected: str) -> None:
        assert format_title(slug) == expected

    def test__natural_key__orders_numbers_by_value(self) -> None:
        assert sorted(["item10", "Item2", "item1"], key=natural_key) == [
            "item1",
            "Item2",
            "item10",
        ]

    def test__sort_nodes__leaves_first(self) -> None:
        nodes = [
            NavNode(title="A folder", children=[]),
            NavNode(title="Z page", path="/z"),
        ]

        sort_nodes(nodes)

        assert [node.title for node in nodes] == ["Z page", "A folder"]

    def test__mark_open__returns_state(self) -> None:
        leaf = NavNode(title="Leaf", path="/g/leaf")
        folder = NavNode(title="G", children=[leaf])

        assert mark_open(folder, "/g/leaf") is True
        assert folder.is_open
        assert leaf.is_open
