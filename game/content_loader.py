"""
Content loading - configuration and question bank for the Loading phase
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from utils.constants import CONTENT_FILE

logger = logging.getLogger(__name__)


class ContentLoader(ABC):
    """Source of the server configuration and the question records"""

    @abstractmethod
    async def fetch_config(self):
        """Return the configuration dict (questionTimeLimit, ...)"""

    @abstractmethod
    async def fetch_questions(self):
        """Return a list of question records"""


class StaticContentLoader(ContentLoader):
    """Content already in memory"""

    def __init__(self, config=None, questions=None):
        self.config = dict(config or {})
        self.questions = list(questions or [])

    async def fetch_config(self):
        return dict(self.config)

    async def fetch_questions(self):
        return list(self.questions)


class FileContentLoader(ContentLoader):
    """
    Reads a JSON document of the form
    {"config": {...}, "questions": [...]}
    """

    def __init__(self, path=CONTENT_FILE):
        self.path = Path(path)
        self._data = None

    async def fetch_config(self):
        data = await self._load()
        config = data.get('config', {})
        if not isinstance(config, dict):
            raise ValueError(f"'config' in {self.path} must be an object")
        return config

    async def fetch_questions(self):
        data = await self._load()
        questions = data.get('questions')
        if not isinstance(questions, list):
            raise ValueError(f"'questions' in {self.path} must be a list")
        return questions

    async def _load(self):
        if self._data is None:
            self._data = await asyncio.to_thread(self._read)
            logger.info("Loaded game content from %s", self.path)
        return self._data

    def _read(self):
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a JSON object")
        return data

    def __repr__(self):
        return f"FileContentLoader(path={str(self.path)!r})"
