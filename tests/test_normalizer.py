"""Tests for the listing description normalizer."""

import threading

import pytest

from moderation.logic import normalizer as normalizer_module
from moderation.logic.normalizer import (
    DescriptionNormalizer,
    FormattingLogic,
    get_normalizer,
    normalize_description,
)


@pytest.mark.parametrize("text", ["", None, "   ", " \n \n\n  "])
def test_empty_input_gives_empty_output(normalizer, text):
    assert normalizer.normalize(text) == ""


def test_capitalizes_each_sentence(normalizer):
    result = normalizer.normalize("hello world. this is bar-mart.")
    assert "Hello world." in result
    assert "This is bar-mart." in result
    assert result == "Hello world. This is bar-mart."


def test_capitalizes_first_letter_after_leading_digits(normalizer):
    assert normalizer.normalize("3 pens left! 2 pencils too?") == "3 Pens left! 2 Pencils too?"


def test_rest_of_sentence_is_untouched(normalizer):
    assert normalizer.normalize("iPhone 12 in BLUE. works fine.") == "IPhone 12 in BLUE. Works fine."


def test_paragraphs_are_separated_by_blank_line(normalizer):
    text = "first line.\n\n\nsecond line!\nthird line"
    assert normalizer.normalize(text) == "First line.\n\nSecond line!\n\nThird line"


def test_short_comma_paragraph_becomes_bullets(normalizer):
    result = normalizer.normalize("Books, pens, and notebooks")
    lines = result.split("\n")
    assert len(lines) == 3
    assert all(line.startswith("• ") for line in lines)
    assert result == "• Books\n• pens\n• and notebooks"


def test_two_items_are_not_a_list(normalizer):
    assert normalizer.normalize("salt, pepper") == "Salt, pepper"


def test_long_comma_paragraph_is_left_as_prose(normalizer):
    short = "a, b, " + "c" * 93
    long = "a, b, " + "c" * 94
    assert len(short) == 99 and len(long) == 100

    assert normalizer.normalize(short).startswith("• A\n• b\n• ccc")
    assert "•" not in normalizer.normalize(long)


def test_bullets_only_apply_to_matching_paragraph(normalizer):
    text = "selling my dorm kit.\nlamp, rug, kettle"
    assert normalizer.normalize(text) == "Selling my dorm kit.\n\n• Lamp\n• rug\n• kettle"


def test_repeated_spaces_are_collapsed(normalizer):
    assert normalizer.normalize("lots   of    space.   here") == "Lots of space. Here"


def test_contraction_fixes(normalizer):
    assert "I'm not sure if I can" in normalizer.normalize("im not sure if i can")
    assert normalizer.normalize("dont worry, i wont be late") == "Don't worry, I won't be late"


def test_corrections_are_whole_word_only(normalizer):
    result = normalizer.normalize("the item is in mint shape. it wont fit a dontpad")
    assert result == "The item is in mint shape. It won't fit a dontpad"


def test_fail_open_returns_original(normalizer, monkeypatch):
    def _boom(paragraph):
        raise RuntimeError("formatter exploded")

    monkeypatch.setattr(FormattingLogic, "as_bullets", staticmethod(_boom))

    text = "lamp, rug, kettle"
    assert normalizer.normalize(text) == text


def test_fail_open_on_non_text_input(normalizer):
    assert normalizer.normalize(12345) == 12345


def test_configurable_list_threshold():
    normalizer = DescriptionNormalizer(corrections=[], bullet_min_items=2)
    assert normalizer.normalize("salt, pepper") == "• Salt\n• pepper"


def test_module_level_helper_uses_shared_normalizer():
    text = "hello there. im selling a desk"
    assert normalize_description(text) == get_normalizer().normalize(text)
    assert normalize_description(text) == "Hello there. I'm selling a desk"


def test_shared_normalizer_is_built_once_across_threads(monkeypatch):
    monkeypatch.setattr(normalizer_module, "_default_normalizer", None)

    built = []
    original_init = DescriptionNormalizer.__init__

    def _counting_init(self, *args, **kwargs):
        built.append(self)
        original_init(self, *args, **kwargs)

    monkeypatch.setattr(DescriptionNormalizer, "__init__", _counting_init)

    barrier = threading.Barrier(8)
    results = []

    def _worker():
        barrier.wait()
        results.append(get_normalizer())

    threads = [threading.Thread(target=_worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(built) == 1
    assert all(r is built[0] for r in results)
