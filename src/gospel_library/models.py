from dataclasses import dataclass
from typing import Optional


@dataclass
class ScriptureVerse:
    book: str
    chapter: int
    verse: int
    text: str

    @property
    def citation(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"


@dataclass
class ConferenceTalk:
    id: int
    speaker: str
    title: str
    conference: str
    date: str
    full_text: Optional[str] = None
    excerpt: Optional[str] = None

    @property
    def header(self) -> str:
        return f"{self.speaker} - {self.title} ({self.conference}, {self.date})"
