"""JSON persistence for trained and untrained models."""

from __future__ import annotations

import json
from pathlib import Path

from .exceptions import ClassifierError, ModelFormatError
from .model import NaiveBayesModel

FORMAT_NAME = "bayes-classifier"
FORMAT_VERSION = 1


def dumps_model(model: NaiveBayesModel) -> str:
    """Serialize a model to a JSON string."""
    payload = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "model": model.to_dict(),
    }
    return json.dumps(payload, indent=2)


def loads_model(text: str) -> NaiveBayesModel:
    """Deserialize a model from a JSON string.

    Raises:
        ModelFormatError: If the text is not a valid serialized model.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ModelFormatError(f"Invalid JSON: {e}") from e

    if not isinstance(payload, dict) or payload.get("format") != FORMAT_NAME:
        raise ModelFormatError(f"Not a {FORMAT_NAME} model file.")
    version = payload.get("version")
    if version != FORMAT_VERSION:
        raise ModelFormatError(
            f"Unsupported model version: {version!r} (expected {FORMAT_VERSION})"
        )

    try:
        return NaiveBayesModel.from_dict(payload["model"])
    except ClassifierError as e:
        raise ModelFormatError(f"Invalid model data: {e}") from e
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ModelFormatError(f"Invalid model data: {e!r}") from e


def save_model(model: NaiveBayesModel, path: str | Path) -> None:
    """Save a model to a JSON file, creating parent directories.

    Args:
        model: The model to save.
        path: File path to save to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps_model(model))


def load_model(path: str | Path) -> NaiveBayesModel:
    """Load a model from a JSON file.

    Args:
        path: Path to the saved model file.

    Returns:
        The restored model, trained if it was saved trained.

    Raises:
        ModelFormatError: If the file does not hold a valid model.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise ModelFormatError(f"Model file is not valid UTF-8: {e}") from e
    return loads_model(text)
