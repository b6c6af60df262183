"""
Question bank lookup for diagnostics.

The bank is static, read-only data supplied by the product: an ordered list
of yes/no questions per diagnostic name.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

from diagnostic_tracker.errors import UnknownDiagnosticError
from diagnostic_tracker.models.question import Question
from diagnostic_tracker.utils.constants import ENV_QUESTION_BANK_PATH


class QuestionBank:
    """
    Ordered questions keyed by diagnostic name.

    Example usage:
        bank = QuestionBank.from_json("questions.json")
        questions = bank.questions_for("Marketing Effectiveness Diagnostic")
    """

    def __init__(self, question_sets: Mapping[str, Sequence[Union[Question, dict]]]) -> None:
        """
        Initialize bank.

        Args:
            question_sets: Mapping of diagnostic name to questions, either
                           Question objects or {"id", "text"} dicts

        Raises:
            pydantic.ValidationError: If a question is malformed
            ValueError: If a diagnostic has no questions
        """
        self._sets: Dict[str, List[Question]] = {}
        for name, questions in question_sets.items():
            parsed = [Question.model_validate(q) for q in questions]
            if not parsed:
                raise ValueError(f"Diagnostic '{name}' has no questions")
            self._sets[name] = parsed

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'QuestionBank':
        """
        Load a bank from a JSON file shaped {name: [{"id", "text"}, ...]}.

        Raises:
            FileNotFoundError: If path doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Question bank not found: {path}")
        return cls(json.loads(path.read_text(encoding='utf-8')))

    @classmethod
    def from_env(cls) -> Optional['QuestionBank']:
        """Load the bank named by QUESTION_BANK_PATH, or None if unset."""
        path = os.getenv(ENV_QUESTION_BANK_PATH)
        return cls.from_json(path) if path else None

    def names(self) -> List[str]:
        return list(self._sets)

    def questions_for(self, tool_name: str) -> List[Question]:
        """
        Return the ordered questions for a diagnostic.

        Raises:
            UnknownDiagnosticError: If the bank has no such diagnostic
        """
        try:
            return list(self._sets[tool_name])
        except KeyError:
            raise UnknownDiagnosticError(tool_name) from None

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._sets
