"""Shared test fixtures for bayes-classifier tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from bayes_classifier import NaiveBayesModel

# meat examples from baconipsum, veggie examples from veggieipsum
FOOD_EXAMPLES: list[tuple[str, str]] = [
    (
        "beetroot water spinach okra water chestnut ricebean pea catsear courgette "
        "summer purslane. water spinach arugula pea tatsoi aubergine spring onion bush "
        "tomato kale radicchio turnip chicory salsify pea sprouts fava bean. dandelion "
        "zucchini burdock yarrow chickpea dandelion sorrel courgette turnip greens "
        "tigernut soybean radish artichoke wattle seed endive groundnut broccoli arugula.",
        "veggie",
    ),
    (
        "sirloin meatloaf ham hock sausage meatball tongue prosciutto picanha turkey "
        "ball tip pastrami. ribeye chicken sausage, ham hock landjaeger pork belly "
        "pancetta ball tip tenderloin leberkas shank shankle rump. cupim short ribs "
        "ground round biltong tenderloin ribeye drumstick landjaeger short loin doner "
        "chicken shoulder spare ribs fatback boudin. pork chop shank shoulder, t-bone "
        "beef ribs drumstick landjaeger meatball.",
        "meat",
    ),
    (
        "pea horseradish azuki bean lettuce avocado asparagus okra. kohlrabi radish "
        "okra azuki bean corn fava bean mustard tigernut jicama green bean celtuce "
        "collard greens avocado quandong fennel gumbo black-eyed pea. grape silver beet "
        "watercress potato tigernut corn groundnut. chickweed okra pea winter purslane "
        "coriander yarrow sweet pepper radish garlic brussels sprout groundnut summer "
        "purslane earthnut pea tomato spring onion azuki bean gourd. gumbo kakadu plum "
        "komatsuna black-eyed pea green bean zucchini gourd winter purslane silver beet "
        "rock melon radish asparagus spinach.",
        "veggie",
    ),
    (
        "sirloin porchetta drumstick, pastrami bresaola landjaeger turducken kevin ham "
        "capicola corned beef. pork cow capicola, pancetta turkey tri-tip doner ball tip "
        "salami. fatback pastrami rump pancetta landjaeger. doner porchetta meatloaf "
        "short ribs cow chuck jerky pork chop landjaeger picanha tail.",
        "meat",
    ),
]


@pytest.fixture
def food_examples() -> list[tuple[str, str]]:
    """Two veggie and two meat documents."""
    return list(FOOD_EXAMPLES)


@pytest.fixture
def food_model(food_examples: list[tuple[str, str]]) -> NaiveBayesModel:
    """Untrained model holding the food examples."""
    model = NaiveBayesModel()
    for text, label in food_examples:
        model.add_document(text, label)
    return model


@pytest.fixture
def trained_food_model(food_model: NaiveBayesModel) -> NaiveBayesModel:
    """Food model after training."""
    food_model.train()
    return food_model


@pytest.fixture
def tiny_model() -> NaiveBayesModel:
    """Trained model small enough to check probabilities by hand.

    Vocabulary {a, b, c}; class x saw "a a b", class y saw "b c".
    """
    model = NaiveBayesModel()
    model.add_document("a a b", "x")
    model.add_document("b c", "y")
    model.train()
    return model


@pytest.fixture
def food_tsv(tmp_path: Path, food_examples: list[tuple[str, str]]) -> Path:
    """Food examples written as a label<TAB>text corpus."""
    path = tmp_path / "foods.tsv"
    path.write_text(
        "".join(f"{label}\t{text}\n" for text, label in food_examples),
        encoding="utf-8",
    )
    return path
