from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

SourceT = TypeVar("SourceT")


class ContentFetcher(ABC, Generic[SourceT]):
    """Materializes an imported package into its cache directory.

    The destination directory is named after the imported package.
    """

    @abstractmethod
    def fetch(self, source: SourceT, destination_dir: Path) -> None:
        raise NotImplementedError
