import pytest

from ngineer.errors import ConditionFormatError
from ngineer.parsing import comments, conditionals, domains, guess_values


def test_conditional_parser():
    my_code = (
        "\n"
        "If you see this in the output you're in it deep\n"
        "    if a < b:\n"
        "    b - a\n"
        "else:\n"
        "    a - b\n"
        "end"
    )
    res = conditionals(my_code)
    assert "if(a,4.0,b,b-a,a-b) = 0" in res


def test_comparison_op_parser():
    my_code = (
        "\n"
        "If you see this in the output you're in it deep\n"
        "    if a =< b:\n"
        "    b - a = 0\n"
        "else:\n"
        "    a - b = 0\n"
        "end"
    )
    with pytest.raises(ConditionFormatError) as info:
        conditionals(my_code)
    assert str(info.value) == (
        "invalid comparison operator. valid operators are: <, >, <=, >=, ==, !="
    )
    assert info.value.kind is ConditionFormatError.Kind.COMPARATOR


def test_nested_conditional_formatting():
    my_code = (
        "\n"
        "If you see this in the output you're in it deep\n"
        "\n"
        "if a < b:\n"
        "    b - a = 1\n"
        "else:\n"
        "    if a == b:\n"
        "        b = a\n"
        "    else:\n"
        "        a - b = 1\n"
        "    end\n"
        "end\n"
    )
    res = conditionals(my_code)
    assert "if(a,4.0,b,b-a-(1),if(a,1.0,b,b-(a),a-b-(1))) = 0" in res


def test_conditional_keeps_surrounding_text():
    my_code = "x = 2\nif a < b:\n    b - a\nelse:\n    a - b\nend\ny = 3"
    res = conditionals(my_code)
    assert res.startswith("x = 2\n")
    assert res.endswith("\ny = 3")
    assert "else" not in res


def test_conditional_without_comparator_is_rejected():
    my_code = "if a = b:\n    b - a\nelse:\n    a - b\nend"
    with pytest.raises(ConditionFormatError) as info:
        conditionals(my_code)
    assert info.value.kind is ConditionFormatError.Kind.CONDITIONAL_SYNTAX


def test_text_without_conditionals_is_unchanged():
    text = "x + y = 9\nx - y = 4\n"
    assert conditionals(text) == text


def test_guess_values_extracts_and_strips():
    text, guesses = guess_values("guess 3 for y\nx + y = 9")
    assert guesses == {"y": 3.0}
    assert text == "\nx + y = 9"


def test_guess_values_negative_and_case_insensitive():
    text, guesses = guess_values("GUESS -2.5 for speed_1\n")
    assert guesses == {"speed_1": -2.5}
    assert "GUESS" not in text


def test_guess_values_without_declarations():
    text, guesses = guess_values("x = 1")
    assert (text, guesses) == ("x = 1", {})


def test_domains_extracts_and_strips():
    text, bounds = domains("keep x on [0, 100]\nx + y = 9")
    assert bounds == {"x": (0.0, 100.0)}
    assert text == "\nx + y = 9"


def test_domains_negative_lower_bound():
    _, bounds = domains("keep t on [-5, 5.5]")
    assert bounds == {"t": (-5.0, 5.5)}


def test_comments_are_removed():
    assert comments("x = 1 // first\ny = 2\n// whole line") == "x = 1 \ny = 2\n"


def test_comments_leave_plain_text_alone():
    assert comments("x / 2 = y") == "x / 2 = y"