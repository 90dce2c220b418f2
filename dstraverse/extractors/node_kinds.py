# dstraverse/extractors/node_kinds.py

import os
import tomllib
from enum import Enum
from typing import Dict, List, Optional

HERE = os.path.dirname(os.path.abspath(__file__))
BUILTIN_PROFILES_PATH = os.path.join(HERE, "..", "config", "grammars.toml")


class NodeKind(Enum):
    IMPORT = "import"
    TYPE_DECLARATION = "type_declaration"
    FUNCTION_DECLARATION = "function_declaration"
    BINDING = "binding"
    IDENTIFIER = "identifier"
    TYPE_ANNOTATION = "type_annotation"
    TYPE_IDENTIFIER = "type_identifier"
    CALL_EXPRESSION = "call_expression"
    MEMBER_CONTAINER = "member_container"
    OTHER = "other"


class GrammarProfile:
    """Maps the node type strings of one tree-sitter grammar onto NodeKind."""

    def __init__(self, name: str, grammar: str, kinds: Dict[str, List[str]], extensions: Optional[List[str]] = None):
        self.name = name
        self.grammar = grammar
        self.extensions = list(extensions or [])
        self.type_map = {}
        for kind_name, node_types in kinds.items():
            try:
                kind = NodeKind(kind_name)
            except ValueError:
                raise ValueError(f"Unknown node kind '{kind_name}' in grammar profile '{name}'")
            for node_type in node_types:
                self.type_map[node_type] = kind

    def classify(self, node) -> NodeKind:
        return self.type_map.get(node.type, NodeKind.OTHER)

    def is_kind(self, node, kind: NodeKind) -> bool:
        return self.classify(node) is kind

    def __repr__(self):
        return f"GrammarProfile(name={self.name!r}, grammar={self.grammar!r})"


def _read_profiles(path):
    with open(path, "rb") as f:
        raw = tomllib.load(f)
    profiles = {}
    for name, data in raw.items():
        if "grammar" not in data:
            raise ValueError(f"Grammar profile '{name}' in {path} has no 'grammar' key")
        profiles[name] = GrammarProfile(
            name,
            data["grammar"],
            data.get("kinds", {}),
            data.get("extensions"),
        )
    return profiles


def load_profiles(path: Optional[str] = None) -> Dict[str, GrammarProfile]:
    # user profiles override built-ins of the same name
    profiles = _read_profiles(BUILTIN_PROFILES_PATH)
    if path:
        profiles.update(_read_profiles(path))
    return profiles


def get_profile(name: str, path: Optional[str] = None) -> GrammarProfile:
    profiles = load_profiles(path)
    profile = profiles.get(name.lower())
    if profile is None:
        raise ValueError(f"No grammar profile named '{name}'. Available: {sorted(profiles)}")
    return profile
