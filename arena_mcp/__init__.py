"""
Are.na MCP Server

Exposes Are.na channels, blocks, connections and users to AI assistants.
"""

__version__ = "1.0.0"
