"""Command-line interface for the naive Bayes text classifier.

Provides ``train``, ``classify``, and ``inspect`` commands with rich
terminal output using the ``click`` and ``rich`` libraries.

Usage::

    bayes-classifier train corpus.tsv -o model.json
    bayes-classifier classify model.json "salami pancetta beef ribs"
    bayes-classifier inspect model.json
"""

from __future__ import annotations

import json
import logging
import math
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .corpus import load_corpus
from .exceptions import ClassifierError
from .model import NaiveBayesModel
from .persistence import load_model, save_model

console = Console()


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/] {escape(str(error))}")
    sys.exit(1)


def _load(path: Path) -> NaiveBayesModel:
    try:
        return load_model(path)
    except (ClassifierError, OSError) as e:
        _fail(e)


@click.group()
@click.version_option(package_name="bayes-classifier")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Multinomial naive Bayes text classifier.

    Train a model on labeled documents, then classify new text with it.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@main.command()
@click.argument("corpus", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              required=True, help="Where to save the trained model (JSON).")
@click.option("--smoothing", type=float, default=1.0, show_default=True,
              help="Additive smoothing constant (1.0 = Laplace).")
def train(corpus: Path, output: Path, smoothing: float) -> None:
    """Train a model on a labeled corpus and save it.

    CORPUS is a .tsv file (label<TAB>text per line) or a .jsonl file
    with "text" and "label" fields.

    Example: bayes-classifier train foods.tsv -o foods.json
    """
    try:
        model = NaiveBayesModel(smoothing=smoothing)
        with console.status("[bold blue]Training model...", spinner="dots"):
            documents = load_corpus(corpus)
            model.add_documents((doc.text, doc.label) for doc in documents)
            model.train()
        save_model(model, output)
    except (ClassifierError, OSError, ValueError) as e:
        _fail(e)

    _render_summary(model, title=f"Trained on {corpus.name}")
    console.print(f"[dim]Model saved to {output}[/]")


@main.command()
@click.argument("model_path", metavar="MODEL",
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("texts", nargs=-1)
@click.option("--file", "-f", "files", multiple=True,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Classify the contents of a text file (repeatable).")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def classify(model_path: Path, texts: tuple[str, ...], files: tuple[Path, ...],
             output: str) -> None:
    """Classify TEXTS with a trained model.

    Example: bayes-classifier classify foods.json "salami pancetta beef ribs"
    """
    documents = [(text, text) for text in texts]
    for p in files:
        try:
            documents.append((str(p), p.read_text(encoding="utf-8")))
        except UnicodeDecodeError as e:
            _fail(ValueError(f"{p} is not valid UTF-8 text: {e.reason}"))
        except OSError as e:
            _fail(e)
    if not documents:
        raise click.UsageError("Provide at least one TEXT or --file.")

    model = _load(model_path)
    try:
        results = [
            {
                "input": name,
                "label": model.classify(text),
                "probabilities": dict(model.document_probabilities(text)),
            }
            for name, text in documents
        ]
    except ClassifierError as e:
        _fail(e)

    if output == "json":
        click.echo(json.dumps(results, indent=2))
        return

    table = Table(title=f"Classification: {model_path.name}")
    table.add_column("Input", style="white", max_width=50)
    table.add_column("Label", style="bold cyan")
    table.add_column("Prob.", justify="right", width=8)
    for result in results:
        excerpt = result["input"][:80].replace("\n", " ")
        table.add_row(excerpt, result["label"],
                      f"{result['probabilities'][result['label']]:.2%}")
    console.print(table)


@main.command()
@click.argument("model_path", metavar="MODEL",
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(model_path: Path) -> None:
    """Show the labels, priors, and vocabulary of a saved model."""
    model = _load(model_path)
    _render_summary(model, title=model_path.name)


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_summary(model: NaiveBayesModel, title: str) -> None:
    """Render per-label statistics as a rich table."""
    console.print(Panel(
        f"State: [bold]{model.state.value}[/] | "
        f"Documents: {model.num_documents} | "
        f"Vocabulary: {len(model.vocabulary)} | "
        f"Smoothing: {model.smoothing:g}",
        title=title,
        border_style="blue",
    ))

    table = Table(show_lines=False)
    table.add_column("Label", style="cyan")
    table.add_column("Documents", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Prior", justify="right")

    for label in model.labels:
        stats = model.class_stats(label)
        if model.is_trained:
            prior = f"{math.exp(model.probability_table(label).log_prior):.2%}"
        else:
            prior = "-"
        table.add_row(label, str(stats.num_documents), str(stats.num_words), prior)

    console.print(table)
    console.print()


if __name__ == "__main__":
    main()
