from text_input import format_sample, parse_sample


def test_parse_skips_blank_and_invalid_lines():
    text = "3\n\n  1 \nabc\n2.5\n0\n   \n12x\n7"
    assert parse_sample(text) == [3, 1, 0, 7]


def test_parse_handles_windows_newlines_and_signs():
    assert parse_sample("4\r\n-2\r\n+5\r\n") == [4, -2, 5]


def test_parse_empty():
    assert parse_sample("") == []
    assert parse_sample("\n\n  \n") == []


def test_format_sample():
    assert format_sample([0, 1, 2]) == "0\n1\n2\n"
    assert format_sample([]) == ""


def test_parse_drops_values_outside_int32():
    assert parse_sample("3\n99999999999999\n1") == [3, 1]
    assert parse_sample("2147483647\n2147483648\n-2147483648\n-2147483649") == [2147483647, -2147483648]
