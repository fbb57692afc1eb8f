from datetime import date

import pytest

from app.core.exceptions import EmptyDateError, InvalidDateFormatError, ValidationError
from app.core.periods import format_period, month_index, parse_optional_period, parse_period


def test_parse_period_returns_first_day_of_month():
    assert parse_period('01-2024') == date(2024, 1, 1)
    assert parse_period('12-2030') == date(2030, 12, 1)


def test_parse_then_format_keeps_month_index():
    parsed = parse_period('03-2025')
    assert month_index(parsed) == 2025 * 12 + 3
    assert format_period(parsed) == '03-2025'


def test_empty_token_is_a_distinct_error():
    with pytest.raises(EmptyDateError):
        parse_period('')


@pytest.mark.parametrize(
    'token',
    ['13-2024', '00-2024', '1-2024', '01-24', '2024-01', '01/2024', ' 01-2024', '01-2024\n', 'jan-2024', '01-0000'],
)
def test_malformed_tokens_are_rejected(token):
    with pytest.raises(InvalidDateFormatError):
        parse_period(token)


def test_parser_errors_are_validation_errors():
    with pytest.raises(ValidationError):
        parse_period('bogus')


def test_parse_optional_period():
    assert parse_optional_period(None) is None
    assert parse_optional_period('') is None
    assert parse_optional_period('07-2023') == date(2023, 7, 1)


def test_month_index_is_linear_across_years():
    assert month_index(date(2024, 1, 1)) - month_index(date(2023, 12, 31)) == 1
