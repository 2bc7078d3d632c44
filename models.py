from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WordOfDay:
    word: str
    meaning: str


@dataclass(frozen=True)
class MorningEssence:
    greeting: str
    quote: str
    word_of_day: WordOfDay
    tip: str

    @classmethod
    def from_dict(cls, data: Any) -> MorningEssence:
        """Build an essence from the model's JSON reply.

        Raises ValueError when the reply does not match the declared schema.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        word = data.get("wordOfDay")
        if not isinstance(word, dict):
            raise ValueError("Field 'wordOfDay' must be an object")
        return cls(
            greeting=_require_str(data, "greeting"),
            quote=_require_str(data, "quote"),
            word_of_day=WordOfDay(
                word=_require_str(word, "word"),
                meaning=_require_str(word, "meaning"),
            ),
            tip=_require_str(data, "tip"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "greeting": self.greeting,
            "quote": self.quote,
            "wordOfDay": {"word": self.word_of_day.word, "meaning": self.word_of_day.meaning},
            "tip": self.tip,
        }


@dataclass(frozen=True)
class Task:
    id: str
    text: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}


@dataclass(frozen=True)
class MoodData:
    day: str
    level: int


INITIAL_MOOD: tuple[MoodData, ...] = (
    MoodData("Seg", 7),
    MoodData("Ter", 6),
    MoodData("Qua", 8),
    MoodData("Qui", 9),
    MoodData("Sex", 7),
    MoodData("Sáb", 8),
    MoodData("Dom", 10),
)


def _require_str(data: dict, key: str) -> str:
    if key not in data:
        raise ValueError(f"Missing required field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"Field '{key}' must be a string")
    return value
