import random

import pytest

from pass_generator import (
    ALPHABETS,
    DIGITS,
    LOWER,
    SYMBOLS,
    UPPER,
    ErrorReason,
    GenerateResult,
    OptionsError,
    assemble,
    generate,
    parse_options,
)


def _password(options, rng=None) -> str:
    result = generate(options, rng)
    assert result.ok, result.error
    return result.password


def test_length_only_uses_lowercase():
    pw = _password({"length": "12"})
    assert len(pw) == 12
    assert all(c in LOWER for c in pw)


def test_numbers_true():
    for _ in range(50):
        pw = _password({"length": "5", "numbers": "true"})
        assert len(pw) == 5
        assert any(c in DIGITS for c in pw)
        assert any(c in LOWER for c in pw)
        assert all(c in LOWER + DIGITS for c in pw)


def test_numbers_false_is_lowercase_only():
    pw = _password({"length": "5", "numbers": "false"})
    assert len(pw) == 5
    assert all(c in LOWER for c in pw)


def test_all_classes_present():
    options = {"length": "4", "numbers": "true", "uppercase": "true", "symbols": "true"}
    for _ in range(50):
        pw = _password(options)
        assert len(pw) == 4
        for alphabet in (LOWER, DIGITS, UPPER, SYMBOLS):
            assert sum(c in alphabet for c in pw) == 1


def test_no_unrequested_class_appears():
    for _ in range(50):
        pw = _password({"length": "40", "uppercase": "true", "symbols": "false"})
        assert all(c in LOWER + UPPER for c in pw)


def test_values_are_trimmed():
    pw = _password({"length": " 8 \n", "symbols": "  true "})
    assert len(pw) == 8
    assert any(c in SYMBOLS for c in pw)


def test_missing_length():
    result = generate({})
    assert result == GenerateResult(error=ErrorReason.MISSING_LENGTH)
    assert result.to_dict() == {"error": "length missing"}


def test_missing_length_wins_over_other_errors():
    result = generate({"numbers": "maybe", "foo": "true"})
    assert result.error is ErrorReason.MISSING_LENGTH


@pytest.mark.parametrize("length", ["abc", "", "   ", "-5", "+5", "5.0", "1e3", "5a", "٣"])
def test_length_not_an_integer(length):
    result = generate({"length": length})
    assert result.error is ErrorReason.INVALID_LENGTH
    assert result.to_dict() == {"error": "length not an integer"}


def test_invalid_length_checked_before_option_values():
    result = generate({"length": "x", "numbers": "maybe"})
    assert result.error is ErrorReason.INVALID_LENGTH


@pytest.mark.parametrize("value", ["maybe", "True", "FALSE", "1", "", "yes"])
def test_non_boolean_option(value):
    result = generate({"length": "5", "numbers": value})
    assert result.error is ErrorReason.NON_BOOLEAN_OPTION
    assert result.to_dict() == {"error": "options values must be boolean"}


def test_non_boolean_checked_before_unsupported_key():
    result = generate({"length": "5", "foo": "true", "numbers": "maybe"})
    assert result.error is ErrorReason.NON_BOOLEAN_OPTION


def test_unsupported_option():
    result = generate({"length": "5", "foo": "true"})
    assert result.error is ErrorReason.UNSUPPORTED_OPTION
    assert result.to_dict() == {"error": "only numbers, uppercase, symbols options allowed"}


def test_unknown_false_option_is_ignored():
    pw = _password({"length": "6", "foo": "false", "lowercase": "false"})
    assert len(pw) == 6


def test_lowercase_is_not_a_user_option():
    result = generate({"length": "5", "lowercase": "true"})
    assert result.error is ErrorReason.UNSUPPORTED_OPTION


@pytest.mark.parametrize(
    "options",
    [
        {"length": "0"},
        {"length": "1", "numbers": "true"},
        {"length": "3", "numbers": "true", "uppercase": "true", "symbols": "true"},
    ],
)
def test_length_too_small(options):
    result = generate(options)
    assert result.error is ErrorReason.LENGTH_TOO_SMALL


def test_minimum_lengths_succeed():
    assert len(_password({"length": "1"})) == 1
    assert len(_password({"length": "2", "uppercase": "true"})) == 2


def test_large_length():
    pw = _password({"length": "2000", "numbers": "true", "symbols": "true"})
    assert len(pw) == 2000


def test_leading_zeros_parse_as_decimal():
    assert len(_password({"length": "010"})) == 10


def test_invalid_input_is_stable():
    options = {"length": "5", "numbers": "maybe"}
    assert generate(options) == generate(options)


def test_seeded_rng_is_reproducible():
    options = {"length": "16", "numbers": "true", "uppercase": "true"}
    a = _password(options, random.Random(42))
    b = _password(options, random.Random(42))
    assert a == b


def test_parse_options_raises_with_reason():
    with pytest.raises(OptionsError) as excinfo:
        parse_options({"length": "5", "foo": "true"})
    assert excinfo.value.reason is ErrorReason.UNSUPPORTED_OPTION


def test_parse_options_keeps_true_classes_only():
    request = parse_options({"length": "9", "symbols": "true", "numbers": "false", "uppercase": "true"})
    assert request.length == 9
    assert request.classes == ("symbols", "uppercase")
    assert request.all_classes == ("lowercase", "symbols", "uppercase")


def test_assemble_rejects_too_short_length():
    with pytest.raises(ValueError):
        assemble(1, ["lowercase", "numbers"])


def test_shuffle_moves_mandatory_characters():
    # with a single extra class the digit must show up in every position eventually
    rng = random.Random(7)
    positions = set()
    for _ in range(400):
        pw = assemble(4, ["lowercase", "numbers"], rng)
        positions.update(i for i, c in enumerate(pw) if c in ALPHABETS["numbers"])
    assert positions == {0, 1, 2, 3}


def test_result_needs_exactly_one_field():
    with pytest.raises(ValueError):
        GenerateResult()
    with pytest.raises(ValueError):
        GenerateResult(password="abc", error=ErrorReason.MISSING_LENGTH)


def test_result_repr_hides_password():
    result = GenerateResult(password="s3cretpw")
    assert "s3cretpw" not in repr(result)
    assert result.to_dict() == {"password": "s3cretpw"}


def test_assemble_checks_length_before_drawing():
    class CountingRandom(random.Random):
        calls = 0

        def choice(self, seq):
            self.calls += 1
            return super().choice(seq)

    rng = CountingRandom(1)
    with pytest.raises(ValueError):
        assemble(1, ["lowercase", "numbers", "symbols"], rng)
    assert rng.calls == 0
