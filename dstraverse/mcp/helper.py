import inspect
import os
import tomllib
import traceback
from functools import wraps
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

HERE = os.path.dirname(os.path.abspath(__file__))

with open(os.path.join(HERE, "tool_descriptions.toml"), "rb") as f:
    parsed_data = tomllib.load(f)


def auto_mcp_tool(mcp: FastMCP, tool_key: str):
    """
    Register `func` as the MCP tool `tool_key`, attaching the parameter
    descriptions from tool_descriptions.toml.

    Every described key must be a parameter of the tool function, so a
    renamed argument cannot silently lose its description.
    """
    def decorator(func):
        tool_data = parsed_data[tool_key]
        params = inspect.signature(func).parameters
        unknown = [k for k in tool_data if k != "description" and k not in params]
        if unknown:
            raise ValueError(f"{tool_key}: described parameters not in signature: {', '.join(unknown)}")

        annotations = dict(func.__annotations__)
        for name, param in params.items():
            if name not in tool_data:
                continue
            base = annotations.get(name, str if param.annotation is inspect.Parameter.empty else param.annotation)
            annotations[name] = Annotated[base, Field(description=tool_data[name])]

        func.__annotations__ = annotations
        return mcp.tool(name=tool_key, description=tool_data["description"])(func)

    return decorator


def safe_error(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            print(traceback.format_exc())
            return {"status": "failure", "error_type": type(e).__name__, "message": str(e)}

    return wrapper
