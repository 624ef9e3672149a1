"""Tests for the text tools."""

from mcp_learning.capabilities.text import analyze_text, sentiment, text_utils, top_words


class TestTextUtils:
    """Test text_utils function."""

    def test_reverse(self):
        """Test reversing text."""
        assert text_utils("reverse", "MCP is awesome!") == (
            'Operation: reverse\nInput: "MCP is awesome!"\nResult: !emosewa si PCM'
        )

    def test_case(self):
        """Test case conversion."""
        assert text_utils("uppercase", "abc").endswith("Result: ABC")
        assert text_utils("lowercase", "ABC").endswith("Result: abc")

    def test_count(self):
        """Test character and word counts."""
        assert text_utils("count", "hello big world").endswith(
            "Result: Character count: 15, Word count: 3"
        )


class TestAnalyzeText:
    """Test the text analyzer."""

    def test_basic_statistics(self):
        """Test the basic statistics block."""
        result = analyze_text("Hello world. How are you?\n\nFine!")
        assert result.startswith("Text Analysis Results:\n\nBasic Statistics:")
        assert "- Characters: 32 (26 without spaces)" in result
        assert "- Words: 6" in result
        assert "- Sentences: 3" in result
        assert "- Paragraphs: 2" in result
        assert "- Average words per sentence: 2.0" in result
        assert "Top 5 Words" not in result
        assert "Sentiment" not in result

    def test_top_words(self):
        """Test word frequency output."""
        result = analyze_text("the cat and the hat and the bat", include_words=True)
        assert 'Top 5 Words:\n1. "the" (3 times)\n2. "and" (2 times)' in result

    def test_top_words_skips_short_words(self):
        """Test that words of two letters or fewer are skipped."""
        assert top_words("a an the a an") == [("the", 1)]

    def test_sentiment(self):
        """Test sentiment classification."""
        assert sentiment("What a great and wonderful day")[0] == "Positive"
        assert sentiment("This is terrible")[0] == "Negative"
        assert sentiment("A table")[0] == "Neutral"

    def test_sentiment_section(self):
        """Test the sentiment block."""
        result = analyze_text("I love this, it is perfect.", include_sentiment=True)
        assert "- Overall sentiment: Positive" in result
        assert "- Positive indicators: 2" in result
        assert "- Negative indicators: 0" in result
