from fastmcp import FastMCP
from dstraverse.catalog import load_catalog
from dstraverse.main import create_usage_data
from dstraverse.mcp.helper import parsed_data, auto_mcp_tool, safe_error
from dstraverse.registry.extractor_registry import get_extractor

mcp = FastMCP(
    "Design System Usage MCP", instructions=parsed_data["tool_description"]["instructions"]
)


@auto_mcp_tool(mcp, "extract_design_system_usage")
@safe_error
def mcp_extract_design_system_usage(
    file_path: str,
    language: str = "swift",
    catalog_path: str = "",
):
    catalog = load_catalog(catalog_path or None)
    extractor = get_extractor(language, catalog=catalog)
    return extractor.process_file(file_path)


@auto_mcp_tool(mcp, "create_usage_data")
@safe_error
def mcp_create_usage_data(
    root_dir: str,
    output_path: str = "./output/usage",
    graph_output_path: str = "./output/graph",
    language: str = "swift",
    catalog_path: str = "",
):
    counts = create_usage_data(
        root_dir,
        output_path,
        graph_output_path,
        clear_existing=True,
        language=language,
        catalog_path=catalog_path or None,
    )
    return {
        "status": "success",
        "output_path": output_path,
        "graph_path": graph_output_path,
        "component_usage": counts,
    }


@auto_mcp_tool(mcp, "list_catalog_components")
@safe_error
def mcp_list_catalog_components(catalog_path: str = ""):
    return load_catalog(catalog_path or None).to_list()


def main():
    # defaults to http://localhost:8000/sse
    mcp.run(transport="sse")


if __name__ == "__main__":
    main()
