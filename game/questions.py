"""
Questions - records, the question bank and the single-use question request
handed to whatever presents the question to the player
"""

import logging
from typing import Any, List, Optional, Union

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, Field, PositiveFloat, ValidationError, field_validator
)

from utils.constants import (
    ALL_CATEGORIES, DEFAULT_QUESTION_TIME_LIMIT, MIN_QUESTION_TIME_LIMIT
)
from game.errors import QuestionFormatError, ConfigFormatError

logger = logging.getLogger(__name__)

OPTION_COUNT = 4


class Question(BaseModel):
    """
    One multiple-choice question

    Accepts bank records with camelCase keys (correctAnswerIndex,
    responseTimeLimit) as well as the field names.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[Union[int, str]] = Field(None, validation_alias=AliasChoices("id", "_id"))
    text: str
    options: List[str] = Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correct_answer_index: int = Field(alias="correctAnswerIndex", ge=0, lt=OPTION_COUNT)
    response_time_limit: Optional[PositiveFloat] = Field(None, alias="responseTimeLimit")
    category: Optional[str] = None

    @field_validator("options", mode="before")
    @classmethod
    def options_as_text(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return [o if isinstance(o, str) else str(o) for o in v]
        return v

    @classmethod
    def from_dict(cls, data):
        """
        Build from a question bank record

        Raises:
            QuestionFormatError: if a required field is missing or invalid
        """
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise QuestionFormatError(f"malformed question record: {exc}") from exc

    def is_correct(self, index):
        return index == self.correct_answer_index

    def to_dict(self):
        return self.model_dump(by_alias=True)


class ServerConfig(BaseModel):
    """Configuration fetched while loading; unknown keys are kept"""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    question_time_limit: Optional[PositiveFloat] = Field(None, alias="questionTimeLimit")

    @classmethod
    def from_dict(cls, data=None):
        """
        Raises:
            ConfigFormatError: if a known key has an invalid value
        """
        if isinstance(data, ServerConfig):
            return data
        try:
            return cls.model_validate(data or {})
        except ValidationError as exc:
            raise ConfigFormatError(f"malformed server config: {exc}") from exc


class QuestionBank:
    """
    Questions available to a session
    Draws do not repeat until every question has been asked once
    """
    def __init__(self, questions=(), categories=None):
        """
        Args:
            questions: Iterable of Question
            categories: Category names to keep; None or ['all'] keeps everything
        """
        questions = list(questions)
        if categories and ALL_CATEGORIES not in categories:
            wanted = set(categories)
            questions = [q for q in questions if q.category in wanted]

        self.questions = questions
        self._asked = set()

    @classmethod
    def from_records(cls, records, categories=None):
        """Build from raw dict records, raising QuestionFormatError on bad ones"""
        return cls([Question.from_dict(r) for r in records], categories)

    def __len__(self):
        return len(self.questions)

    def is_empty(self):
        return not self.questions

    def draw(self, rng):
        """
        Pick a question not asked yet

        Args:
            rng: SeededRandom

        Returns:
            Question, or None if the bank is empty
        """
        if not self.questions:
            return None

        remaining = [i for i in range(len(self.questions)) if i not in self._asked]
        if not remaining:
            logger.debug("Question bank exhausted, starting over")
            self._asked.clear()
            remaining = list(range(len(self.questions)))

        index = rng.choice(remaining)
        self._asked.add(index)
        return self.questions[index]


def resolve_time_limit(question, server_config=None, modifier=0):
    """
    Seconds allowed to answer: question limit, else server default, else 10,
    shifted by the difficulty modifier

    Args:
        question: Question
        server_config: ServerConfig or a raw config dict
        modifier: Difficulty question_time_modifier
    """
    server_config = ServerConfig.from_dict(server_config)
    base = (question.response_time_limit
            or server_config.question_time_limit
            or DEFAULT_QUESTION_TIME_LIMIT)
    return max(MIN_QUESTION_TIME_LIMIT, base + modifier)


class QuestionRequest:
    """
    Hand-off to the question presenter

    Carries the reason, the question, the time limit and the difficulty
    config. Exactly one of submit(), expire() or resolve() takes effect;
    later calls are ignored.
    """
    def __init__(self, reason, question, time_limit, config, on_answer):
        self.reason = reason
        self.question = question
        self.time_limit = time_limit
        self.config = config
        self._on_answer = on_answer
        self.answered = False
        self.answer_log = None

    def submit(self, selected_index, time_taken=0.0):
        """Player picked an option"""
        correct = self.question.is_correct(selected_index)
        return self._finish(selected_index, correct, time_taken)

    def expire(self):
        """Answer timer ran out"""
        return self._finish(-1, False, self.time_limit)

    def resolve(self, correct, time_taken=0.0):
        """Verdict only; the log records the right option or -1"""
        index = self.question.correct_answer_index if correct else -1
        return self._finish(index, bool(correct), time_taken)

    def _finish(self, selected_index, correct, time_taken):
        if self.answered:
            logger.debug("Ignoring second answer for question %r", self.question.id)
            return False

        self.answered = True
        self.answer_log = {
            'questionId': self.question.id,
            'selectedAnswerIndex': selected_index,
            'isCorrect': correct,
            'timeTaken': max(0, min(time_taken, self.time_limit)),
        }
        self._on_answer(self, correct)
        return True

    def __repr__(self):
        return f"QuestionRequest(reason={self.reason!r}, question={self.question!r}, answered={self.answered})"
