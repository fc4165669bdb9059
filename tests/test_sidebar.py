from statue.cache import ContentCache
from statue.content import ContentScanner
from statue.repository import ContentRepository
from statue.sidebar import DEFAULT_ORDER, SidebarBuilder, SidebarGroup, SidebarItem


def make_builder(make_source, variables, files, directories=()):
    scanner = ContentScanner(make_source(files, directories=directories), variables)
    return SidebarBuilder(ContentRepository(scanner, ContentCache()))


DOCS = {
    "index.md": "# Home\n",
    "docs/intro.md": "---\norder: 1\n---\n# Intro\n",
    "docs/zeta.md": "# Zeta\n",
    "docs/alpha.md": "# Alpha\n",
    "docs/guides/b.md": "---\norder: 2\ntitle: Guide B\n---\n",
    "docs/guides/a.md": "---\norder: 1\ntitle: Guide A\n---\n",
    "docs/api/x.md": "---\norder: true\n---\n# X\n",
    "docs2/elsewhere.md": "# Elsewhere\n",
}


def test_build_orders_root_items_then_groups(make_source, variables):
    sidebar = make_builder(make_source, variables, DOCS).build("docs")
    assert sidebar == [
        SidebarItem(title="Intro", url="/docs/intro", order=1),
        SidebarItem(title="Zeta", url="/docs/zeta", order=DEFAULT_ORDER),
        SidebarItem(title="Alpha", url="/docs/alpha", order=DEFAULT_ORDER),
        SidebarGroup(
            title="Guides",
            children=[
                SidebarItem(title="Guide A", url="/docs/guides/a", order=1),
                SidebarItem(title="Guide B", url="/docs/guides/b", order=2),
            ],
        ),
        SidebarGroup(
            title="Api",
            children=[SidebarItem(title="X", url="/docs/api/x", order=DEFAULT_ORDER)],
        ),
    ]


def test_equal_orders_keep_scan_order(make_source, variables):
    files = {
        "blog/c.md": "---\norder: 5\n---\n",
        "blog/a.md": "---\norder: 5\n---\n",
        "blog/b.md": "---\norder: 1\n---\n",
    }
    sidebar = make_builder(make_source, variables, files).build("blog")
    assert [item.url for item in sidebar] == ["/blog/b", "/blog/c", "/blog/a"]


def test_nested_entries_group_by_first_segment(make_source, variables):
    files = {
        "docs/guides/deep/one.md": "# One\n",
        "docs/guides/two.md": "# Two\n",
    }
    (group,) = make_builder(make_source, variables, files).build("docs")
    assert group.title == "Guides"
    assert [item.url for item in group.children] == [
        "/docs/guides/deep/one",
        "/docs/guides/two",
    ]


def test_build_full_skips_empty_directories(make_source, variables):
    builder = make_builder(make_source, variables, DOCS, directories=["empty"])
    full = builder.build_full()
    assert [(group.title, group.url) for group in full] == [
        ("Docs", "/docs"),
        ("Docs2", "/docs2"),
    ]
    assert full[1].children == [
        SidebarItem(title="Elsewhere", url="/docs2/elsewhere", order=DEFAULT_ORDER)
    ]


def test_build_unknown_directory_is_empty(make_source, variables):
    assert make_builder(make_source, variables, DOCS).build("missing") == []
