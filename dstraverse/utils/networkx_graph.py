import os
import json
import networkx as nx


def load_records_from_dir(output_dir):
    """Read every per-file JSON output below `output_dir`, keyed by relative path."""
    records_by_file = {}
    for dirpath, _, files in os.walk(output_dir):
        for fn in sorted(files):
            if not fn.endswith(".json"):
                continue
            fullpath = os.path.join(dirpath, fn)
            with open(fullpath, "r", encoding="utf-8") as f:
                data = json.load(f)
            rel = os.path.relpath(fullpath, output_dir).replace("\\", "/")
            records_by_file[os.path.splitext(rel)[0]] = data
    return records_by_file


def flatten_location(location):
    """{"file", "start": {"row", "column"}, "end": {...}} -> flat graphml-friendly attributes"""
    attrs = {}
    if location.get("file"):
        attrs["file"] = location["file"]
    for key in ("start", "end"):
        point = location.get(key) or {}
        for axis in ("row", "column"):
            if point.get(axis) is not None:
                attrs[f"{key}_{axis}"] = point[axis]
    return attrs


def node_attributes(node):
    attrs = {}
    for k, v in node.items():
        # graphml has no null, a missing attribute reads the same
        if k == "id" or v is None:
            continue
        if k == "location":
            attrs.update(flatten_location(v))
        elif isinstance(v, (str, int, float, bool)):
            attrs[k] = v
        else:
            # properties, imported_from, files
            attrs[k] = json.dumps(v)
    return attrs


def build_graph_from_schema(schema):
    """
    Build the usage graph from an adapted schema.

    Repeated edges between the same pair (a declaration calling the same
    component twice) are kept as one edge whose `count` is the number of
    call sites.
    """
    G = nx.DiGraph()

    for node in schema["nodes"]:
        G.add_node(node["id"], **node_attributes(node))

    for edge in schema["edges"]:
        src, dst = edge["from"], edge["to"]
        if G.has_edge(src, dst):
            G.edges[src, dst]["count"] += 1
        else:
            G.add_edge(src, dst, relation=edge.get("relation") or "", count=1)

    return G


def component_usage_counts(G: nx.DiGraph) -> dict:
    """
    Count the call sites of each component node.

    Args:
        G: Graph built from an adapted usage schema.

    Returns:
        Mapping of component node id to the summed `count` of its incoming
        `uses` edges.
    """
    counts = {}
    for _, dst, data in G.edges(data=True):
        if data.get("relation") == "uses":
            counts[dst] = counts.get(dst, 0) + data.get("count", 1)
    return counts
