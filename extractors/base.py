from abc import ABC, abstractmethod
from typing import List

from core.models import FeedEntry, ImageCandidate


class ImageStrategy(ABC):
    name: str

    @abstractmethod
    def extract(self, entry: FeedEntry) -> List[ImageCandidate]:
        ...
