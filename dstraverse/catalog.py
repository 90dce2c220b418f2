# dstraverse/catalog.py

import os
import json
import tomllib

HERE = os.path.dirname(os.path.abspath(__file__))
DEFAULT_CATALOG_PATH = os.path.join(HERE, "config", "catalog.toml")
CATALOG_ENV_VAR = "DSTRAVERSE_CATALOG"


def normalize_entry(raw):
    if not isinstance(raw, dict) or not raw.get("name"):
        raise ValueError(f"Catalog entry without a name: {raw!r}")
    return {
        "name": str(raw["name"]),
        "version": str(raw.get("version", "")),
        "scope": str(raw.get("scope", "")),
        "dependencies": list(raw.get("dependencies", [])),
        "files": list(raw.get("files", [])),
    }


class ComponentCatalog:
    """
    Read-only table of known design system components.

    Lookups are exact and case-sensitive. If two entries share a name the
    later one wins.
    """

    def __init__(self, entries=None):
        self._entries = [normalize_entry(e) for e in (entries or [])]
        self._by_name = {}
        for entry in self._entries:
            self._by_name[entry["name"]] = entry

    def lookup(self, name: str):
        return self._by_name.get(name)

    def names(self):
        return list(self._by_name)

    def to_list(self):
        return [dict(e, dependencies=list(e["dependencies"]), files=list(e["files"])) for e in self._entries]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, name):
        return name in self._by_name


def _read_entries(path):
    ext = os.path.splitext(path)[1].lower()
    if ext == ".toml":
        with open(path, "rb") as f:
            data = tomllib.load(f)
    elif ext == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        raise ValueError(f"Unsupported catalog format: {path}")

    if isinstance(data, dict):
        data = data.get("components", [])
    if not isinstance(data, list):
        raise ValueError(f"Catalog {path} must contain a list of components")
    return data


def load_catalog(path=None) -> ComponentCatalog:
    if path is None:
        path = os.environ.get(CATALOG_ENV_VAR) or DEFAULT_CATALOG_PATH
    return ComponentCatalog(_read_entries(path))
