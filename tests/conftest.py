import pytest

from dstraverse.catalog import ComponentCatalog
from dstraverse.extractors.design_system_extractor import DesignSystemExtractor
from dstraverse.extractors.node_kinds import get_profile


class FakeNode:
    """Stand-in for a tree_sitter.Node with just the attributes the walker reads."""

    def __init__(self, type, start_byte, end_byte, start_point, end_point, children=(), is_named=True):
        self.type = type
        self.start_byte = start_byte
        self.end_byte = end_byte
        self.start_point = start_point
        self.end_point = end_point
        self.children = list(children)
        self.is_named = is_named

    @property
    def named_children(self):
        return [c for c in self.children if c.is_named]


def point_at(src, offset):
    prefix = src[:offset]
    row = prefix.count(b"\n")
    return (row, offset - (prefix.rfind(b"\n") + 1))


class TreeBuilder:
    """
    Builds FakeNode trees over a source string. Each node is located by its
    snippet; `nth` picks a later occurrence when the snippet repeats.
    """

    def __init__(self, source):
        self.src = source.encode("utf8")

    def node(self, type, snippet, *children, named=True, nth=0):
        needle = snippet.encode("utf8")
        start = -1
        for _ in range(nth + 1):
            start = self.src.index(needle, start + 1)
        end = start + len(needle)
        return FakeNode(type, start, end, point_at(self.src, start), point_at(self.src, end), children, named)

    def keyword(self, text, nth=0):
        return self.node(text, text, named=False, nth=nth)

    def root(self, *children):
        return FakeNode("source_file", 0, len(self.src), (0, 0), point_at(self.src, len(self.src)), children)


CATALOG_ENTRIES = [
    {"name": "Button", "version": "1.0", "scope": "UI", "dependencies": [], "files": ["Button.swift"]},
    {"name": "Input", "version": "1.2", "scope": "UI", "dependencies": [], "files": ["Input.swift"]},
    {"name": "Card", "version": "2.0", "scope": "Layout", "dependencies": ["Button"], "files": ["Card.swift", "CardStyle.swift"]},
]


@pytest.fixture
def catalog():
    return ComponentCatalog(CATALOG_ENTRIES)


@pytest.fixture
def generic_extractor(catalog):
    return DesignSystemExtractor(profile=get_profile("generic"), catalog=catalog)


@pytest.fixture
def swift_extractor(catalog):
    return DesignSystemExtractor(profile=get_profile("swift"), catalog=catalog)


@pytest.fixture
def builder():
    return TreeBuilder
