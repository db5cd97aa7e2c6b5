"""
Module: page.py
Description: Page size settings for the webhook history.

A page setting is either one of a fixed set of positive page sizes or
the ALL sentinel, which shows every retained record on a single page.
Settings are persisted as a decimal string or the literal "all".

Dependencies: typing
"""

from typing import Iterable, Union

ALL = "all"

PageSetting = Union[int, str]

DEFAULT_CAPACITY_MULTIPLIER = 10
DEFAULT_ALL_CAPACITY = 10000


def parse_page_setting(value: Union[int, str], options: Iterable[int]) -> PageSetting:
    """
    Parse a page setting from user input or persisted text.

    Args:
        value: Integer page size, decimal string, or "all"
        options: Allowed fixed page sizes

    Returns:
        The integer page size or ALL

    Raises:
        ValueError: If the value is not ALL or one of the allowed sizes
    """
    if isinstance(value, str):
        text = value.strip().lower()
        if text == ALL:
            return ALL
        if not text.isdigit():
            raise ValueError(f"Invalid page size '{value}'")
        value = int(text)
    elif isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid page size '{value}'")

    allowed = sorted(set(options))
    if value not in allowed:
        raise ValueError(
            f"Page size must be one of: {', '.join(str(o) for o in allowed)}, {ALL}"
        )
    return value


def serialize_page_setting(setting: PageSetting) -> str:
    """Render a page setting in its persisted form."""
    return ALL if setting == ALL else str(int(setting))


def capacity_for(
    setting: PageSetting,
    multiplier: int = DEFAULT_CAPACITY_MULTIPLIER,
    ceiling: int = DEFAULT_ALL_CAPACITY,
) -> int:
    """
    Retention capacity for a page setting.

    A fixed page size n keeps ``multiplier * n`` records (ten pages of
    scrollback by default). ALL is bounded by ``ceiling``.
    """
    if setting == ALL:
        return ceiling
    return int(setting) * multiplier
