import logging
import random

import pytest

from password_guard import passwords
from password_guard.passwords import (
    ALPHABET,
    SPECIALS,
    generate_suggestion,
    generate_suggestions,
    target_length,
)
from password_guard.requirements import check_requirements
from password_guard.scoring import evaluate


class FixedRng:
    """Always picks the first option and a fixed uniform draw."""

    def __init__(self, draw: float = 0.0) -> None:
        self.draw = draw

    def random(self) -> float:
        return self.draw

    def choice(self, seq):
        return seq[0]

    def randrange(self, stop):
        return 0


@pytest.mark.parametrize(
    "password,strength,expected",
    [
        ("abc", "very-weak", 14),
        ("abc", "weak", 14),
        ("abc", "medium", 12),
        ("abcdefghijklmnop", "strong", 19),
        ("abcdefghijklmnopqrst", "very-weak", 20),
        ("abcdefghijklmnopqrst", "very-strong", 23),
    ],
)
def test_target_length(password, strength, expected):
    assert target_length(password, strength) == expected


def test_padding_appends_one_of_four_sampled_chars():
    assert passwords._pad("ab", 5, FixedRng()) == "abaaa"
    assert passwords._pad("abcdef", 3, FixedRng()) == "abcdef"


def test_repair_fixes_each_missing_class_in_order():
    repaired = passwords._repair("ABCDEFGHIJKL", FixedRng())
    # lowercase at the end, digit inserted at the midpoint, first letter made special
    assert repaired == "!BCDEF0GHIJKa"
    assert all(check_requirements(repaired).values())


def test_special_repair_can_overwrite_uppercase_repair():
    repaired = passwords._repair("abcdefghijklmn", FixedRng())
    assert repaired == "!bcdefg0hijklmn"
    assert check_requirements(repaired)["uppercase"] is False


def test_repair_leaves_satisfied_candidate_alone():
    assert passwords._repair("Password123!", FixedRng()) == "Password123!"


def test_diffusion_skipped_at_or_below_threshold():
    assert passwords._diffuse("abcdefgh", FixedRng(draw=0.7)) == "abcdefgh"
    assert passwords._diffuse("abcdefgh", FixedRng(draw=0.0)) == "abcdefgh"


def test_diffusion_overwrites_quarter_of_positions():
    # ceil(8 / 4) == 2 overwrites, both land on position 0
    assert passwords._diffuse("abcdefgh", FixedRng(draw=0.71)) == ALPHABET[0] + "bcdefgh"


@pytest.mark.parametrize("password", ["abc", "password", "Password123!", "a" * 25, "1234"])
def test_generated_suggestion_reaches_target_length(password):
    rng = random.Random(2024)
    strength = evaluate(password).strength
    expected = target_length(password, strength)
    for _ in range(20):
        candidate = generate_suggestion(password, strength, rng)
        # the digit repair inserts one extra character
        assert len(candidate) in {expected, expected + 1}


@pytest.mark.parametrize("password", ["abc", "password", "Password123!", "a" * 25, "12345678"])
def test_generate_suggestions_distinct_and_valid(password):
    strength = evaluate(password).strength
    suggestions = generate_suggestions(password, strength, 3, rng=random.Random(99))
    assert len(suggestions) == 3
    assert len(set(suggestions)) == 3
    assert password not in suggestions
    for suggestion in suggestions:
        assert all(check_requirements(suggestion).values())


def test_generate_suggestions_without_filter():
    suggestions = generate_suggestions("abc", "weak", 5, require_all=False, rng=random.Random(5))
    assert len(suggestions) == 5
    assert len(set(suggestions)) == 5
    assert "abc" not in suggestions


def test_generate_suggestions_uses_process_wide_random():
    random.seed(11)
    first = generate_suggestions("abc", "weak", 3)
    random.seed(11)
    assert generate_suggestions("abc", "weak", 3) == first


def test_generate_suggestions_not_applicable():
    assert generate_suggestions("", "very-weak") == []
    assert generate_suggestions("abc", "weak", 0) == []


def test_generate_suggestions_gives_up_after_max_attempts(monkeypatch, caplog):
    monkeypatch.setattr(passwords, "generate_suggestion", lambda password, strength, rng=None: "Abcdefgh12!?")
    with caplog.at_level(logging.WARNING, logger="password_guard.passwords"):
        suggestions = generate_suggestions("abc", "weak", 3, max_attempts=10)
    assert suggestions == ["Abcdefgh12!?"]
    assert "produced 1 of 3 after 10 attempts" in caplog.text


def test_generate_suggestions_skips_base_password(monkeypatch):
    monkeypatch.setattr(passwords, "generate_suggestion", lambda password, strength, rng=None: password)
    assert generate_suggestions("Password123!", "very-strong", 3, max_attempts=5) == []


def test_special_alphabet_matches_rule():
    assert all(check_requirements(char)["special"] for char in SPECIALS)
