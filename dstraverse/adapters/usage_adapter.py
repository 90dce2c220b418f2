# dstraverse/adapters/usage_adapter.py

from dstraverse.extractors.design_system_extractor import callee_name


def first_line(text):
    return text.strip().splitlines()[0] if text and text.strip() else ""


def declaration_kind(record):
    return "type" if "inheritedTypeNames" in record else "function"


def make_declaration_id(file_path, record):
    start = record.get("sourceSpanStart", {})
    row, column = start.get("row"), start.get("column")
    return f"{file_path}::{declaration_kind(record)}.{row}.{column}"


def make_component_id(file_path, usage):
    callee = callee_name(usage.get("name", ""))
    if not callee:
        return None
    if "version" in usage:
        return f"catalog::{callee}"
    return f"{file_path}::{callee}"


def adapt_usage_records(records_by_file):
    """
    Turn {file_path: [declaration records]} into a {"nodes", "edges"} schema.

    Catalog-matched components are shared across files under a `catalog::`
    id, everything else stays local to its file.
    """
    nodes = []
    edges = []
    existing = set()

    def add_node(node):
        if node["id"] in existing:
            return
        existing.add(node["id"])
        nodes.append({k: v for k, v in node.items() if v is not None})

    for file_path, records in records_by_file.items():
        for record in records:
            decl_id = make_declaration_id(file_path, record)
            add_node({
                "id": decl_id,
                "category": declaration_kind(record),
                "signature": first_line(record.get("name")),
                "properties": record.get("properties"),
                "imported_from": record.get("importedFrom"),
                "location": {
                    "start": record.get("sourceSpanStart"),
                    "end": record.get("sourceSpanEnd"),
                    "file": file_path,
                },
            })

            for inherited in record.get("inheritedTypeNames", []):
                edges.append({"from": decl_id, "to": f"{file_path}::{inherited}", "relation": "extends"})

            for usage in record.get("components", []):
                comp_id = make_component_id(file_path, usage)
                if not comp_id:
                    continue
                add_node({
                    "id": comp_id,
                    "category": "design_system_component" if "version" in usage else "component",
                    "version": usage.get("version"),
                    "scope": usage.get("scope"),
                    "files": usage.get("files"),
                })
                edges.append({"from": decl_id, "to": comp_id, "relation": "uses"})

                for dep in usage.get("dependencies", []):
                    edges.append({"from": comp_id, "to": f"catalog::{dep}", "relation": "depends_on"})

    # filter empty
    edges = [e for e in edges if e["from"] and e["to"]]
    return {"nodes": nodes, "edges": edges}
