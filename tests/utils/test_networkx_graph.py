import json

from dstraverse.utils.networkx_graph import build_graph_from_schema, component_usage_counts, load_records_from_dir


SCHEMA = {
    "nodes": [
        {
            "id": "a.swift::function.0.0",
            "category": "function",
            "imported_from": ["DesignKit"],
            "location": {"start": {"row": 0, "column": 0}, "end": {"row": 2, "column": 1}, "file": "a.swift"},
        },
        {"id": "b.swift::function.3.4", "category": "function", "properties": None},
        {"id": "catalog::Button", "category": "design_system_component", "version": "1.0", "files": ["Button.swift"]},
    ],
    "edges": [
        {"from": "a.swift::function.0.0", "to": "catalog::Button", "relation": "uses"},
        {"from": "b.swift::function.3.4", "to": "catalog::Button", "relation": "uses"},
        {"from": "catalog::Button", "to": "catalog::Icon", "relation": "depends_on"},
    ],
}


def test_build_graph_from_schema():
    G = build_graph_from_schema(SCHEMA)
    assert G.number_of_nodes() == 4
    assert G.nodes["catalog::Button"]["version"] == "1.0"
    assert json.loads(G.nodes["catalog::Button"]["files"]) == ["Button.swift"]
    assert json.loads(G.nodes["a.swift::function.0.0"]["imported_from"]) == ["DesignKit"]
    assert "properties" not in G.nodes["b.swift::function.3.4"]
    assert G.edges["catalog::Button", "catalog::Icon"]["relation"] == "depends_on"


def test_location_is_flattened_into_typed_attributes():
    G = build_graph_from_schema(SCHEMA)
    attrs = G.nodes["a.swift::function.0.0"]
    assert "location" not in attrs
    assert attrs["file"] == "a.swift"
    assert (attrs["start_row"], attrs["start_column"], attrs["end_row"], attrs["end_column"]) == (0, 0, 2, 1)


def test_repeated_call_sites_become_edge_count():
    schema = {
        "nodes": [{"id": "a.swift::function.0.0"}, {"id": "catalog::Button"}],
        "edges": [{"from": "a.swift::function.0.0", "to": "catalog::Button", "relation": "uses"}] * 3,
    }
    G = build_graph_from_schema(schema)
    assert G.number_of_edges() == 1
    assert G.edges["a.swift::function.0.0", "catalog::Button"]["count"] == 3
    assert component_usage_counts(G) == {"catalog::Button": 3}


def test_component_usage_counts():
    G = build_graph_from_schema(SCHEMA)
    assert component_usage_counts(G) == {"catalog::Button": 2}


def test_load_records_from_dir(tmp_path):
    (tmp_path / "Views").mkdir()
    (tmp_path / "Views" / "Home.json").write_text(json.dumps([{"name": "func a() {}"}]))
    (tmp_path / "App.json").write_text(json.dumps([]))
    (tmp_path / "notes.txt").write_text("ignored")

    records = load_records_from_dir(str(tmp_path))
    assert records == {"Views/Home": [{"name": "func a() {}"}], "App": []}
