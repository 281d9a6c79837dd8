import logging
from typing import Any, Callable, List, Optional

from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

from ..service import GospelLibraryService

logger = logging.getLogger(__name__)


class GetExactScriptureArgs(BaseModel):
    reference: str = Field(
        description="A verse or short range: 'John 3:16', 'Alma 32:27-28', '1 Nephi 3:7'. Range limit: <=50 verses."
    )


class SearchScripturesArgs(BaseModel):
    query: str = Field(
        description="Keyword or short phrase (<100 chars), e.g. 'charity', 'plan of salvation', 'endure to the end'."
    )
    limit: Optional[int] = Field(default=None, ge=1, le=20, description="Max number of results (default 10).")


class RandomScriptureArgs(BaseModel):
    pass


class SearchConferenceTalksArgs(BaseModel):
    id: Optional[int] = Field(default=None, description="Specific talk ID to retrieve")
    query: Optional[str] = Field(
        default=None, description="Keyword(s)/phrase to search in talk content. Keep under 100 chars."
    )
    speaker: Optional[str] = Field(
        default=None,
        description="Speaker name (full or partial). E.g. 'Nelson', 'Russell M. Nelson', 'Holland'.",
    )
    conference: Optional[str] = Field(
        default=None,
        description="Conference identifier (e.g., 'April 2023', 'Oct 2022', or '2023-04').",
    )
    limit: Optional[int] = Field(
        default=None, ge=1, le=20,
        description="Maximum number of results (default 10). Use smaller numbers for broad topics.",
    )


class _BaseLibraryTool(BaseTool):
    """Shared plumbing: holds the service and turns failures into text."""

    service: Any = Field(default=None)

    def __init__(self, service: GospelLibraryService, **kwargs):
        super().__init__(**kwargs)
        self.service = service

    def _invoke(self, call: Callable[[], List[str]]) -> str:
        logger.debug(f"tool invoke {self.name}")
        try:
            blocks = call()
        except Exception as e:
            logger.error(f"tool error {self.name}: {e}")
            return f"Error: {str(e) or 'Tool execution failed'}"
        logger.debug(f"tool result {self.name} ok")
        return "\n\n".join(blocks)

    async def _arun(self, *args, **kwargs) -> str:
        return self._run(*args, **kwargs)


class GetExactScriptureTool(_BaseLibraryTool):
    name: str = "get_exact_scripture"
    description: str = (
        "Fetch an exact LDS scripture verse or short contiguous range (Bible, Book of Mormon, "
        "D&C, Pearl of Great Price). Always call before quoting scripture wording."
    )
    args_schema: type[BaseModel] = GetExactScriptureArgs

    def _run(self, reference: str) -> str:
        return self._invoke(lambda: self.service.get_exact_scripture(reference))


class SearchScripturesByKeywordTool(_BaseLibraryTool):
    name: str = "search_scriptures_by_keyword"
    description: str = (
        "Search LDS scriptures by keyword/phrase (topic discovery). "
        "Use before teaching on a topic or when user asks 'verses about X'."
    )
    args_schema: type[BaseModel] = SearchScripturesArgs

    def _run(self, query: str, limit: Optional[int] = None) -> str:
        return self._invoke(lambda: self.service.search_scriptures_by_keyword(query, limit))


class GetRandomScriptureTool(_BaseLibraryTool):
    name: str = "get_random_scripture"
    description: str = (
        "Return a single random scripture verse (any standard work). Useful for daily verse prompts."
    )
    args_schema: type[BaseModel] = RandomScriptureArgs

    def _run(self) -> str:
        return self._invoke(self.service.get_random_scripture)


class SearchConferenceTalksTool(_BaseLibraryTool):
    name: str = "search_conference_talks"
    description: str = (
        "General Conference talks (modern prophets/apostles). Use for quotes, sourcing, or locating "
        "talks by speaker, conference, or topic. Use 'id' for a specific talk; otherwise filter with "
        "speaker/conference/query (keep query <100 chars). Always fetch before quoting."
    )
    args_schema: type[BaseModel] = SearchConferenceTalksArgs

    def _run(
        self,
        id: Optional[int] = None,
        query: Optional[str] = None,
        speaker: Optional[str] = None,
        conference: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> str:
        return self._invoke(
            lambda: self.service.search_conference_talks(
                talk_id=id,
                query=query,
                speaker=speaker,
                conference=conference,
                limit=limit,
            )
        )


def build_library_tools(service: GospelLibraryService) -> List[BaseTool]:
    """Create every library tool bound to one service instance."""
    return [
        GetExactScriptureTool(service=service),
        SearchScripturesByKeywordTool(service=service),
        GetRandomScriptureTool(service=service),
        SearchConferenceTalksTool(service=service),
    ]
