"""Tests for transport artifact cleaning."""

from weatherchat.extraction.cleaner import clean


class TestClean:
    def test_empty(self):
        assert clean("") == ""

    def test_index_prefix_on_each_line(self):
        assert clean('0: Hello\n1: world') == "Hello world"

    def test_data_prefix(self):
        assert clean("data: Sunny today") == "Sunny today"

    def test_escaped_sequences(self):
        assert clean('It is \\"mild\\"\\nin Rome') == 'It is "mild" in Rome'

    def test_whitespace_collapsed_and_trimmed(self):
        assert clean("  a \t b\n\n c  ") == "a b c"

    def test_prefixes_stripped_before_escapes(self):
        assert clean("Hello\\n2: there") == "Hello 2: there"

    def test_idempotent(self):
        samples = [
            "0: 12: nested prefixes",
            'data: 3: \\"quoted\\"\\n4: next',
            "plain text",
            "\\\\n odd escapes",
            "   ",
        ]
        for text in samples:
            once = clean(text)
            assert clean(once) == once
