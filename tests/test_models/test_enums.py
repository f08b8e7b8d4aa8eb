"""Tests for the fixed taxonomies and mood scores."""

import pytest

from mindsetu.domain.errors import InvalidMoodValue, InvalidWillingnessValue
from mindsetu.models import MOOD_SCORES, EmotionalState, WillingnessLevel, mood_score


class TestEmotionalState:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("good", EmotionalState.GOOD),
            ("  Tired ", EmotionalState.TIRED),
            ("UNMOTIVATED", EmotionalState.UNMOTIVATED),
            (EmotionalState.STRESSED, EmotionalState.STRESSED),
        ],
    )
    def test_parse(self, raw, expected):
        assert EmotionalState.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["happy", "", None, 3])
    def test_parse_rejects(self, raw):
        with pytest.raises(InvalidMoodValue):
            EmotionalState.parse(raw)

    def test_coerce_returns_none(self):
        assert EmotionalState.coerce("happy") is None
        assert EmotionalState.coerce("neutral") is EmotionalState.NEUTRAL

    def test_positive_moods(self):
        positive = {s for s in EmotionalState if s.is_positive}
        assert positive == {EmotionalState.NEUTRAL, EmotionalState.GOOD}


class TestWillingnessLevel:
    def test_parse(self):
        assert WillingnessLevel.parse("High") is WillingnessLevel.HIGH

    def test_parse_rejects(self):
        with pytest.raises(InvalidWillingnessValue) as exc_info:
            WillingnessLevel.parse("extreme")
        assert exc_info.value.value == "extreme"

    def test_coerce(self):
        assert WillingnessLevel.coerce(None) is None
        assert WillingnessLevel.coerce("low") is WillingnessLevel.LOW


class TestMoodScores:
    def test_every_state_scored(self):
        assert set(MOOD_SCORES) == set(EmotionalState)

    def test_values(self):
        assert [MOOD_SCORES[s] for s in EmotionalState] == [1, 2, 2, 3, 5]

    def test_tired_and_unmotivated_tie(self):
        assert EmotionalState.TIRED.score == EmotionalState.UNMOTIVATED.score

    def test_mood_score_parses(self):
        assert mood_score("good") == 5
        with pytest.raises(InvalidMoodValue):
            mood_score("great")
