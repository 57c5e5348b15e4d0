import pytest

from access_assistant.voice.lexicon import find_setting, find_value, is_affirmative, normalize


@pytest.mark.parametrize(
    "utterance",
    ["  High Contrast ", "TURN   ON\tlinks", "", "color blind\n", "Set It To Protanopia Please"],
)
def test_normalize_is_idempotent(utterance: str) -> None:
    once = normalize(utterance)

    assert normalize(once) == once
    assert once == once.strip().lower()


def test_first_phrase_in_table_order_wins() -> None:
    # "motion" is listed before "links", whatever order the words are spoken in.
    assert find_setting("links and motion") == "reducedMotion"
    assert find_setting("large text with high contrast") == "highContrast"
    assert find_setting("Large Button Mode") == "largeButtonMode"
    assert find_setting("make the font nicer") == "readableFont"
    assert find_setting("pizza please") is None


def test_affirmative_words_match_as_substrings() -> None:
    assert is_affirmative("yes please")
    assert is_affirmative("Turn Off")
    assert is_affirmative("okay")
    assert not is_affirmative("high contrast")


def test_find_value_accepts_spoken_hyphens() -> None:
    sizes = ("small", "medium", "large", "extra-large")

    assert find_value("set it to protanopia please", ("none", "protanopia", "deuteranopia")) == "protanopia"
    assert find_value("extra large", ("extra-large",)) == "extra-large"
    assert find_value("nothing here", sizes) is None
