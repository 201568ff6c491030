"""
Chapter splitter: moves records of special chapters into their own documents.
"""
import logging
from typing import Dict, Any, List, Optional

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
GroupDocument = Dict[int, List[Record]]
SplitDocument = Dict[int, List[Record]]


class ChapterSplitter:
    """
    Extracts records whose chapter is configured for splitting.

    Every record ends up in exactly one place: its split document when the
    chapter matches a configured name, otherwise its group document.
    """

    def __init__(self, split_chapters: Dict[str, str]):
        """
        Initialize chapter splitter.

        Args:
            split_chapters: Chapter name (case-insensitive) -> output document name
        """
        self.split_chapters = {name.lower(): output for name, output in split_chapters.items()}

    @staticmethod
    def _chapter_key(record: Record) -> Optional[str]:
        chapter = record.get("chapter")
        return chapter.lower() if isinstance(chapter, str) else None

    def is_split_chapter(self, chapter: Optional[str]) -> bool:
        return isinstance(chapter, str) and chapter.lower() in self.split_chapters

    def split(self, group_document: GroupDocument) -> Dict[str, SplitDocument]:
        """
        Split special chapters out of a group document.

        The group document is filtered in place; indices keep their position
        even when all of their records move out.

        Args:
            group_document: File index -> records

        Returns:
            Output document name -> split document ({1: records})
        """
        all_rows = [row for rows in group_document.values() for row in rows]
        split_documents: Dict[str, SplitDocument] = {}

        for chapter_name, output_name in self.split_chapters.items():
            matches = [row for row in all_rows if self._chapter_key(row) == chapter_name]
            if matches:
                split_documents[output_name] = {1: matches}
                logger.info(f'Split: {len(matches)} rows from "{chapter_name}"')

        for index in group_document:
            group_document[index] = [
                row for row in group_document[index] if self._chapter_key(row) not in self.split_chapters
            ]

        return split_documents
