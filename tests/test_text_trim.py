"""
Tests for the trim primitives.
"""

from rattle_fit.text_trim import (
    ELLIPSIS,
    get_display_skills,
    trim_to_char_limit,
    trim_to_word_limit,
    truncate_bullets,
)


class TestTrimToWordLimit:
    """Test word-limit trimming."""

    def test_short_text_returned_verbatim(self):
        """Text within the limit comes back stripped with no ellipsis."""
        assert trim_to_word_limit("  Led a team of five.  ", 10) == "Led a team of five."

    def test_exact_limit_not_trimmed(self):
        assert trim_to_word_limit("one two three", 3) == "one two three"

    def test_trailing_period_dropped_before_ellipsis(self):
        assert trim_to_word_limit("Built scalable systems. for clients.", 3) == "Built scalable systems…"

    def test_sentence_trimmed_to_three_words(self):
        assert trim_to_word_limit("Built scalable systems for clients.", 3) == "Built scalable systems…"

    def test_trailing_comma_dropped(self):
        assert trim_to_word_limit("Python, Go, Rust, Java", 2) == "Python, Go…"

    def test_bare_punctuation_word_leaves_no_gap(self):
        assert trim_to_word_limit("a b , c", 3) == "a b…"

    def test_plain_truncation_appends_ellipsis(self):
        result = trim_to_word_limit("alpha beta gamma delta", 2)
        assert result == "alpha beta" + ELLIPSIS

    def test_whitespace_collapsed_when_trimmed(self):
        assert trim_to_word_limit("alpha   beta\n\tgamma delta", 3) == "alpha beta gamma…"

    def test_empty_and_none(self):
        assert trim_to_word_limit("", 5) == ""
        assert trim_to_word_limit(None, 5) == ""

    def test_non_positive_limit(self):
        assert trim_to_word_limit("alpha beta", 0) == ""

    def test_trimming_is_idempotent(self):
        once = trim_to_word_limit("Built scalable systems for clients.", 3)
        assert trim_to_word_limit(once, 3) == once


class TestTrimToCharLimit:
    """Test character-limit trimming."""

    def test_long_certification_trimmed(self):
        result = trim_to_char_limit("AWS Certified Solutions Architect", 10)
        assert len(result) == 10
        assert result.endswith(ELLIPSIS)
        assert result == "AWS Certi…"

    def test_short_text_unchanged(self):
        assert trim_to_char_limit("PMP", 10) == "PMP"

    def test_trailing_whitespace_stripped(self):
        result = trim_to_char_limit("AWS Certified", 5)
        assert result == "AWS…"
        assert len(result) <= 5

    def test_result_never_exceeds_limit(self):
        text = "Certified Kubernetes Application Developer"
        for limit in range(1, len(text) + 2):
            assert len(trim_to_char_limit(text, limit)) <= limit

    def test_empty_and_none(self):
        assert trim_to_char_limit("", 10) == ""
        assert trim_to_char_limit(None, 10) == ""


class TestGetDisplaySkills:
    """Test skills visible/overflow split."""

    def test_overflow_counted(self):
        result = get_display_skills(["A", "B", "C", "D"], 2)
        assert result.visible == ["A", "B"]
        assert result.overflow == 2

    def test_empty(self):
        result = get_display_skills([], 5)
        assert result.visible == []
        assert result.overflow == 0

    def test_none(self):
        result = get_display_skills(None, 5)
        assert result.visible == []
        assert result.overflow == 0

    def test_fewer_than_max(self):
        result = get_display_skills(["A", "B"], 5)
        assert result.visible == ["A", "B"]
        assert result.overflow == 0

    def test_input_not_mutated(self):
        skills = ["A", "B", "C"]
        result = get_display_skills(skills, 1)
        result.visible.append("Z")
        assert skills == ["A", "B", "C"]


class TestTruncateBullets:
    """Test bullet list truncation."""

    def test_truncate_bullets(self):
        bullets = ["Bullet 1", "Bullet 2", "Bullet 3", "Bullet 4", "Bullet 5"]
        truncated, removed = truncate_bullets(bullets, max_bullets=3)

        assert truncated == ["Bullet 1", "Bullet 2", "Bullet 3"]
        assert removed == 2

    def test_truncate_bullets_with_word_limit(self):
        bullets = ["This is a very long bullet point that exceeds the word limit", "Short bullet"]
        truncated, removed = truncate_bullets(bullets, max_bullets=3, max_words_per_bullet=5)

        assert removed == 0
        assert truncated[0] == "This is a very long…"
        assert truncated[1] == "Short bullet"

    def test_empty(self):
        assert truncate_bullets(None, 3) == ([], 0)
