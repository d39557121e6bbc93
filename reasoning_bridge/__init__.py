"""reasoning_bridge

MCP server bridging a Z3 solver and the Exa search API to a single caller.
"""

__version__ = "0.1.0"
