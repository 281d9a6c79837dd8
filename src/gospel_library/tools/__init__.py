from .library_tools import (
    GetExactScriptureTool,
    SearchScripturesByKeywordTool,
    GetRandomScriptureTool,
    SearchConferenceTalksTool,
    build_library_tools,
)

__all__ = [
    "GetExactScriptureTool",
    "SearchScripturesByKeywordTool",
    "GetRandomScriptureTool",
    "SearchConferenceTalksTool",
    "build_library_tools",
]
