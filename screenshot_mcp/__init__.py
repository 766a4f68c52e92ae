"""
screenshot-mcp - macOS application and region screenshots over the Model Context Protocol.
"""

__version__ = "1.0.0"
