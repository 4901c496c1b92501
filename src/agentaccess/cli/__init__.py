"""
AgentAccess CLI

Command-line entry point for evaluating access requests.
"""

from .main import cli

__all__ = ["cli"]
