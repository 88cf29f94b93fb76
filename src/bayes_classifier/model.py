"""Multinomial naive Bayes over bags of word tokens.

The model has an explicit two-phase lifecycle:

1. ``UNTRAINED``: labeled documents are accumulated with
   :meth:`NaiveBayesModel.add_document`. Only raw counts are kept.
2. ``TRAINED``: :meth:`NaiveBayesModel.train` freezes the counts into one
   :class:`ProbabilityTable` per label, after which the model answers
   :meth:`NaiveBayesModel.classify` queries and rejects further documents.

All probability math is done in log space. With smoothing constant
``alpha`` (1.0 by default, i.e. Laplace add-one smoothing), the
likelihood of token ``t`` under label ``c`` is::

    log P(t | c) = ln((n_tc + alpha) / (T_c + alpha * V))

where ``n_tc`` is the count of ``t`` in ``c``, ``T_c`` the total number of
tokens seen for ``c`` and ``V`` the vocabulary size. The log-prior of
``c`` is ``ln(D_c / D)`` over document counts.

When several labels reach exactly the same maximum score, the
lexicographically smallest label is returned.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Optional

from .exceptions import StateError
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

DEFAULT_SMOOTHING = 1.0


class ModelState(str, Enum):
    """Lifecycle phase of a :class:`NaiveBayesModel`."""

    UNTRAINED = "untrained"
    TRAINED = "trained"


# ---------------------------------------------------------------------------
# Per-class statistics
# ---------------------------------------------------------------------------

@dataclass
class ClassStats:
    """Raw token counts accumulated for a single label.

    Attributes:
        label: The class label.
        word_counts: Occurrences of each token in this label's documents.
        num_words: Total number of tokens across this label's documents.
        num_documents: Number of documents added under this label.
    """

    label: str
    word_counts: Counter[str] = field(default_factory=Counter)
    num_words: int = 0
    num_documents: int = 0

    def add_document(self, tokens: list[str]) -> None:
        self.word_counts.update(tokens)
        self.num_words += len(tokens)
        self.num_documents += 1

    def count(self, token: str) -> int:
        """Occurrences of ``token`` in this class (0 if never seen)."""
        return self.word_counts.get(token, 0)

    def copy(self) -> "ClassStats":
        return ClassStats(
            label=self.label,
            word_counts=Counter(self.word_counts),
            num_words=self.num_words,
            num_documents=self.num_documents,
        )

    def to_dict(self) -> dict:
        return {
            "num_documents": self.num_documents,
            "num_words": self.num_words,
            "word_counts": dict(sorted(self.word_counts.items())),
        }

    @classmethod
    def from_dict(cls, label: str, data: dict) -> "ClassStats":
        word_counts = Counter({str(k): int(v) for k, v in data["word_counts"].items()})
        bad = sorted(token for token, n in word_counts.items() if n < 1)
        if bad:
            raise ValueError(
                f"Class {label!r}: word counts must be at least 1, got {bad[:5]}"
            )
        num_words = int(data["num_words"])
        num_documents = int(data["num_documents"])
        if num_documents < 1:
            raise ValueError(
                f"Class {label!r}: num_documents must be at least 1, got {num_documents}"
            )
        if num_words != sum(word_counts.values()):
            raise ValueError(
                f"Class {label!r}: num_words ({num_words}) does not match "
                f"the sum of its word counts ({sum(word_counts.values())})"
            )
        return cls(
            label=label,
            word_counts=word_counts,
            num_words=num_words,
            num_documents=num_documents,
        )


# ---------------------------------------------------------------------------
# Trained probability tables
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProbabilityTable:
    """Smoothed log-probabilities for one label, built by ``train()``.

    Attributes:
        label: The class label.
        log_prior: ``ln(D_c / D)``.
        log_probs: Read-only mapping of every vocabulary token to its
            smoothed log-likelihood under this label.
    """

    label: str
    log_prior: float
    log_probs: Mapping[str, float]

    def log_likelihood(self, token: str) -> float:
        """Log-likelihood of ``token``; raises ``KeyError`` outside the vocabulary."""
        return self.log_probs[token]

    def score(self, tokens: Iterable[str]) -> float:
        """Log-prior plus the log-likelihood of every in-vocabulary token.

        Tokens absent from the vocabulary are skipped.
        """
        total = self.log_prior
        log_probs = self.log_probs
        for token in tokens:
            lp = log_probs.get(token)
            if lp is not None:
                total += lp
        return total


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

class NaiveBayesModel:
    """Multinomial naive Bayes text classifier.

    Example::

        model = NaiveBayesModel()
        model.add_document("sirloin ribeye pork belly", "meat")
        model.add_document("okra kale spinach", "veggie")
        model.train()
        model.classify("pork ribeye")  # "meat"

    Args:
        smoothing: Additive smoothing constant (must be positive).
            ``1.0`` is Laplace smoothing.
        tokenizer: Tokenizer applied to raw text in ``add_document`` and
            ``classify``. Defaults to a lower-casing :class:`Tokenizer`.
    """

    def __init__(
        self,
        smoothing: float = DEFAULT_SMOOTHING,
        tokenizer: Optional[Tokenizer] = None,
    ) -> None:
        self._smoothing = _validate_smoothing(smoothing)
        self.tokenizer = tokenizer or Tokenizer()
        self._state = ModelState.UNTRAINED
        self._classes: dict[str, ClassStats] = {}
        # token -> occurrences across all classes
        self._vocabulary: Counter[str] = Counter()
        self._num_documents = 0
        self._tables: dict[str, ProbabilityTable] = {}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(state={self._state.value}, "
            f"labels={self.labels}, documents={self._num_documents}, "
            f"vocabulary={len(self._vocabulary)}, smoothing={self._smoothing})"
        )

    # -- properties ----------------------------------------------------------

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def is_trained(self) -> bool:
        """Whether the model has been trained."""
        return self._state is ModelState.TRAINED

    @property
    def smoothing(self) -> float:
        return self._smoothing

    @property
    def labels(self) -> list[str]:
        """Known labels in sorted order."""
        return sorted(self._classes)

    @property
    def vocabulary(self) -> frozenset[str]:
        return frozenset(self._vocabulary)

    @property
    def num_documents(self) -> int:
        return self._num_documents

    def set_smoothing(self, smoothing: float) -> None:
        """Change the smoothing constant before training.

        Raises:
            ValueError: If ``smoothing`` is not a positive finite number.
            StateError: If the model has already been trained.
        """
        self._require_untrained("change smoothing")
        self._smoothing = _validate_smoothing(smoothing)

    def class_stats(self, label: str) -> ClassStats:
        """Return a snapshot of the raw counts for ``label``.

        Raises:
            KeyError: If ``label`` was never seen.
        """
        return self._classes[label].copy()

    def probability_table(self, label: str) -> ProbabilityTable:
        """Return the trained table for ``label``.

        Raises:
            StateError: If the model has not been trained.
            KeyError: If ``label`` was never seen.
        """
        self._require_trained()
        return self._tables[label]

    # -- accumulation --------------------------------------------------------

    def add_document(self, text: str, label: str) -> None:
        """Tokenize ``text`` and count its tokens under ``label``.

        Args:
            text: Raw document text.
            label: Class label for the document.

        Raises:
            StateError: If the model has already been trained.
            ValueError: If ``label`` is not a non-empty string.
        """
        self.add_tokens(self.tokenizer.tokenize(text), label)

    def add_tokens(self, tokens: Iterable[str], label: str) -> None:
        """Count a pre-tokenized document under ``label``.

        Tokens are used verbatim; no normalization is applied.

        Raises:
            StateError: If the model has already been trained.
            ValueError: If ``label`` is not a non-empty string.
            TypeError: If ``tokens`` is a single ``str``.
        """
        self._require_untrained("add documents")
        _validate_label(label)
        if isinstance(tokens, str):
            raise TypeError(
                "tokens must be an iterable of strings, not a single str; "
                "use add_document() for raw text"
            )

        tokens = list(tokens)
        stats = self._classes.get(label)
        if stats is None:
            stats = self._classes[label] = ClassStats(label)
        stats.add_document(tokens)
        self._vocabulary.update(tokens)
        self._num_documents += 1

    def add_documents(self, documents: Iterable[tuple[str, str]]) -> int:
        """Add ``(text, label)`` pairs; returns how many were added."""
        added = 0
        for text, label in documents:
            self.add_document(text, label)
            added += 1
        return added

    # -- training ------------------------------------------------------------

    def train(self) -> None:
        """Build the per-label probability tables from the accumulated counts.

        Calling ``train()`` again on a trained model recomputes the same
        tables from the unchanged counts.

        Raises:
            StateError: If no documents were added.
        """
        if self._num_documents == 0:
            raise StateError("Cannot train a model with no documents. Call add_document() first.")

        alpha = self._smoothing
        vocab = sorted(self._vocabulary)
        vocab_size = len(vocab)
        tables: dict[str, ProbabilityTable] = {}

        for label in self.labels:
            stats = self._classes[label]
            log_prior = math.log(stats.num_documents / self._num_documents)
            denominator = stats.num_words + alpha * vocab_size

            log_probs = {
                token: math.log((stats.count(token) + alpha) / denominator)
                for token in vocab
            }
            tables[label] = ProbabilityTable(
                label=label,
                log_prior=log_prior,
                log_probs=MappingProxyType(log_probs),
            )

            logger.debug("prior of %r: %.12f", label, math.exp(log_prior))
            if denominator > 0:
                logger.debug(
                    "default word probability of %r: %.12f", label, alpha / denominator
                )

        self._tables = tables
        self._state = ModelState.TRAINED
        logger.info(
            "Trained naive Bayes model: %d labels, %d documents, %d vocabulary tokens",
            len(tables), self._num_documents, vocab_size,
        )

    # -- classification ------------------------------------------------------

    def classify(self, text: str) -> str:
        """Return the most probable label for ``text``.

        Raises:
            StateError: If the model has not been trained.
        """
        return self.classify_tokens(self.tokenizer.tokenize(text))

    def classify_tokens(self, tokens: Iterable[str]) -> str:
        """Return the most probable label for a pre-tokenized document.

        Ties on the maximum score go to the lexicographically smallest label.

        Raises:
            StateError: If the model has not been trained.
        """
        scores = self._score_tokens(tokens)
        best_label: Optional[str] = None
        best_score = -math.inf
        # scores is ordered by label, so only a strictly greater score wins
        for label, score in scores.items():
            if best_label is None or score > best_score:
                best_label, best_score = label, score
        return best_label

    def scores(self, text: str) -> dict[str, float]:
        """Unnormalized log-posterior score of every label for ``text``.

        Raises:
            StateError: If the model has not been trained.
        """
        return self._score_tokens(self.tokenizer.tokenize(text))

    def document_probabilities(self, text: str) -> list[tuple[str, float]]:
        """Posterior probability of every label for ``text``.

        Scores are normalized with log-sum-exp for numerical stability.

        Returns:
            ``(label, probability)`` pairs, most probable first; equal
            probabilities are ordered by label.

        Raises:
            StateError: If the model has not been trained.
        """
        return self.document_probabilities_tokens(self.tokenizer.tokenize(text))

    def document_probabilities_tokens(self, tokens: Iterable[str]) -> list[tuple[str, float]]:
        """Posterior probability of every label for a pre-tokenized document."""
        log_scores = self._score_tokens(tokens)
        max_score = max(log_scores.values())
        exp_scores = {label: math.exp(s - max_score) for label, s in log_scores.items()}
        total = sum(exp_scores.values())
        probs = [(label, score / total) for label, score in exp_scores.items()]
        probs.sort(key=lambda x: (-x[1], x[0]))
        return probs

    def _score_tokens(self, tokens: Iterable[str]) -> dict[str, float]:
        self._require_trained()
        tokens = list(tokens)
        scores: dict[str, float] = {}
        for label in self.labels:
            scores[label] = self._tables[label].score(tokens)
            logger.debug("score for %s: %.12f", label, scores[label])
        return scores

    # -- guards --------------------------------------------------------------

    def _require_trained(self) -> None:
        if self._state is not ModelState.TRAINED:
            raise StateError("Model not trained. Call train() first.")

    def _require_untrained(self, action: str) -> None:
        if self._state is ModelState.TRAINED:
            raise StateError(
                f"Cannot {action} after training; build a new model instead."
            )

    # -- serialization -------------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize configuration, raw counts and lifecycle state.

        Probability tables are not stored; they are a pure function of the
        counts and are rebuilt by :meth:`from_dict`.
        """
        return {
            "state": self._state.value,
            "smoothing": self._smoothing,
            "tokenizer": self.tokenizer.to_dict(),
            "classes": {
                label: self._classes[label].to_dict() for label in self.labels
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NaiveBayesModel":
        """Deserialize a model; a trained model is retrained from its counts."""
        state = ModelState(data["state"])
        model = cls(
            smoothing=data["smoothing"],
            tokenizer=Tokenizer.from_dict(data.get("tokenizer", {})),
        )
        for label, stats_data in data["classes"].items():
            _validate_label(label)
            stats = ClassStats.from_dict(label, stats_data)
            model._classes[label] = stats
            model._vocabulary.update(stats.word_counts)
            model._num_documents += stats.num_documents

        if state is ModelState.TRAINED:
            model.train()
        return model


def _validate_label(label: str) -> None:
    if not isinstance(label, str) or not label:
        raise ValueError(f"label must be a non-empty string, got {label!r}")


def _validate_smoothing(smoothing: float) -> float:
    if isinstance(smoothing, bool) or not isinstance(smoothing, (int, float)):
        raise ValueError(f"smoothing must be a number, got {smoothing!r}")
    if not math.isfinite(smoothing) or smoothing <= 0:
        raise ValueError(f"smoothing must be a positive number, got {smoothing}")
    return float(smoothing)
