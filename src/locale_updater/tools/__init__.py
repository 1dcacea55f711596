"""
External gettext tool discovery and execution.
"""

from .resolver import (
    HomebrewResolver,
    SearchPathResolver,
    ToolResolver,
    ToolSet,
    select_resolver,
)
from .runner import ToolInvocation, ToolRunner

__all__ = [
    "HomebrewResolver",
    "SearchPathResolver",
    "ToolResolver",
    "ToolSet",
    "select_resolver",
    "ToolInvocation",
    "ToolRunner",
]
