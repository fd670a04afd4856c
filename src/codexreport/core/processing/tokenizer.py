from __future__ import annotations

"""
Token Counting Engine.

Estimates how many LLM tokens a generated document occupies. Uses the
tiktoken BPE encoders and falls back to a character-density heuristic
whenever an encoding cannot be loaded or applied (for example when the
encoding files cannot be downloaded).
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

import tiktoken

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS & CACHE
# -----------------------------------------------------------------------------

CHARS_PER_TOKEN_AVG = 4
DEFAULT_MODEL = "gpt-4o"
MODERN_ENCODING = "o200k_base"
LEGACY_ENCODING = "cl100k_base"

_ENCODING_CACHE: Dict[str, Any] = {}


@dataclass(frozen=True)
class TokenEstimate:
    """Token count together with the method that produced it."""
    count: int
    method: str


# -----------------------------------------------------------------------------
# STRATEGY INTERFACES
# -----------------------------------------------------------------------------

class TokenizerStrategy(ABC):
    """Abstract base class for token counting algorithms."""

    name: str = "abstract"

    @abstractmethod
    def count(self, text: str, model_id: str) -> int:
        """
        Calculate the token count for a given text segment.

        Args:
            text: Input string to be tokenized.
            model_id: Model identifier used for encoding selection.

        Returns:
            int: Total token count.
        """


class HeuristicStrategy(TokenizerStrategy):
    """Character density estimation used when no encoder is usable."""

    name = "heuristic"

    def count(self, text: str, model_id: str) -> int:
        return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)


class TiktokenStrategy(TokenizerStrategy):
    """Local BPE encoding via tiktoken."""

    name = "tiktoken"

    def count(self, text: str, model_id: str) -> int:
        encoding = self._get_encoding(model_id)
        # Surrogate escapes from non-UTF-8 content are not encodable
        clean = text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
        return len(encoding.encode(clean, disallowed_special=()))

    @staticmethod
    def _get_encoding(model_id: str) -> Any:
        """Resolve the encoding for a model, then the modern and legacy defaults."""
        if model_id in _ENCODING_CACHE:
            return _ENCODING_CACHE[model_id]

        try:
            encoding = tiktoken.encoding_for_model(model_id)
        except KeyError:
            try:
                encoding = tiktoken.get_encoding(MODERN_ENCODING)
            except ValueError:
                encoding = tiktoken.get_encoding(LEGACY_ENCODING)

        _ENCODING_CACHE[model_id] = encoding
        return encoding


# -----------------------------------------------------------------------------
# SERVICE ORCHESTRATION (FACADE)
# -----------------------------------------------------------------------------

class TokenizerService:
    """
    Routes token counting to tiktoken with a heuristic safety net.
    """

    def __init__(self) -> None:
        self.heuristic = HeuristicStrategy()
        self._tiktoken: TokenizerStrategy = TiktokenStrategy()

    def estimate(self, text: str, model: str = DEFAULT_MODEL) -> TokenEstimate:
        """
        Count tokens and report which strategy produced the number.

        Args:
            text: Raw input text.
            model: Target model identifier.

        Returns:
            TokenEstimate: Count and method name.
        """
        if not text:
            return TokenEstimate(0, self.heuristic.name)

        try:
            return TokenEstimate(self._tiktoken.count(text, model), self._tiktoken.name)
        except Exception as e:
            logger.warning(f"tiktoken counting failed: {e}. Using heuristic fallback.")
            return TokenEstimate(self.heuristic.count(text, model), self.heuristic.name)

    def count(self, text: str, model: str = DEFAULT_MODEL) -> int:
        return self.estimate(text, model).count


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

_SERVICE_INSTANCE = TokenizerService()


def count_tokens(text: str, model: str = DEFAULT_MODEL) -> int:
    """Estimate the number of tokens of `text` for the target model."""
    return _SERVICE_INSTANCE.count(text, model)


def estimate_tokens(text: str, model: str = DEFAULT_MODEL) -> TokenEstimate:
    """Estimate tokens of `text` and report the counting method."""
    return _SERVICE_INSTANCE.estimate(text, model)
