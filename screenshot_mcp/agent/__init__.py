"""Agent tool bindings."""

from .screen_agent import SCREEN_AGENT_TOOLS

__all__ = ["SCREEN_AGENT_TOOLS"]
