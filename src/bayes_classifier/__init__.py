"""Bayes Classifier -- multinomial naive Bayes text classification."""

__version__ = "0.1.0"

from .corpus import LabeledDocument, load_corpus, read_jsonl, read_tsv
from .exceptions import (
    ClassifierError,
    CorpusFormatError,
    ModelFormatError,
    StateError,
)
from .model import (
    DEFAULT_SMOOTHING,
    ClassStats,
    ModelState,
    NaiveBayesModel,
    ProbabilityTable,
)
from .persistence import dumps_model, load_model, loads_model, save_model
from .tokenizer import Tokenizer, tokenize

# Short alias matching the usual name of the algorithm
NaiveBayes = NaiveBayesModel

__all__ = [
    # Core
    "NaiveBayesModel",
    "NaiveBayes",
    "ModelState",
    "ClassStats",
    "ProbabilityTable",
    "DEFAULT_SMOOTHING",
    # Tokenization
    "Tokenizer",
    "tokenize",
    # Errors
    "ClassifierError",
    "StateError",
    "ModelFormatError",
    "CorpusFormatError",
    # Persistence
    "save_model",
    "load_model",
    "dumps_model",
    "loads_model",
    # Corpus loading
    "LabeledDocument",
    "load_corpus",
    "read_jsonl",
    "read_tsv",
]
