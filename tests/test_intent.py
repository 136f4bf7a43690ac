import pytest

from src.services.intent import Intent, detect_intent, describe_intent


@pytest.mark.parametrize("message, expected", [
    ("What is the tuition for MBA?", Intent.FEES_INFO),
    ("How do I make the semester PAYMENT?", Intent.FEES_INFO),
    ("Who is the HOD of Computer Engineering?", Intent.STAFF_INFO),
    ("List the faculty in mechanical", Intent.STAFF_INFO),
    ("Where is CS-204?", Intent.DIRECTIONS),
    ("How do I find the library building", Intent.DIRECTIONS),
    ("Any announcement about the tech fest?", Intent.EVENTS_INFO),
    ("Latest campus news", Intent.EVENTS_INFO),
    ("What are the library timings?", Intent.GENERAL_INFO),
    ("", Intent.GENERAL_INFO),
])
def test_detect_intent(message, expected):
    assert detect_intent(message) == expected


def test_fees_take_priority_over_staff_and_directions():
    assert detect_intent("Where do I pay the fee to the staff?") == Intent.FEES_INFO


def test_staff_takes_priority_over_directions():
    assert detect_intent("Where is the professor's room?") == Intent.STAFF_INFO


def test_substring_matching_is_not_word_bound():
    # "coffee" contains "fee"
    assert detect_intent("Is there coffee on campus?") == Intent.FEES_INFO


def test_intent_values_are_strings():
    assert Intent.DIRECTIONS.value == "DIRECTIONS"
    assert Intent.DIRECTIONS == "DIRECTIONS"


def test_describe_intent():
    assert describe_intent(Intent.STAFF_INFO) == "Faculty and staff lookups"
