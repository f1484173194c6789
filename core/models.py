from dataclasses import dataclass
from typing import Any, Dict, Optional
from xml.etree.ElementTree import Element


@dataclass(frozen=True)
class Article:
    id: int  # position dans le flux, unique par parse
    title: str
    description: str  # brut, peut contenir du HTML
    link: str
    pub_date: str  # chaine source, non normalisee
    summary: str = ""  # description en texte brut
    author: Optional[str] = None
    category: Optional[str] = None
    guid: Optional[str] = None
    image: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "summary": self.summary,
            "link": self.link,
            "pubDate": self.pub_date,
            "author": self.author,
            "category": self.category,
            "guid": self.guid,
            "image": self.image,
        }


@dataclass(frozen=True)
class ImageCandidate:
    url: str
    width: int = 0
    height: int = 0
    type: str = ""
    source: str = ""


@dataclass(frozen=True)
class FeedEntry:
    """One <item>/<entry> node plus its markup as it appeared in the source."""
    element: Element
    raw: str
