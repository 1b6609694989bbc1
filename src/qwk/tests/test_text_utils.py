"""Tests for the text helpers used by the command handlers."""

import io
from datetime import datetime

import pytest

from qwk.utils.text import backup_timestamp, confirm, read_prompt_from_stdin, truncate_prompt


class TestTruncatePrompt:
    """Test prompt previews for --list."""
    
    def test_short_prompt_unchanged(self):
        assert truncate_prompt("Short prompt", 50) == "Short prompt"
    
    def test_exact_length_unchanged(self):
        text = "Exactly fifty characters long for testing here"
        assert truncate_prompt(text, len(text)) == text
    
    def test_long_prompt_truncated_to_limit(self):
        result = truncate_prompt("This is a very long prompt that should be truncated", 20)
        
        assert result == "This is a very lo..."
        assert len(result) == 20
    
    def test_newlines_collapsed(self):
        assert truncate_prompt("Line one\nLine two\nLine three", 50) == "Line one Line two Line three"
    
    def test_whitespace_runs_collapsed(self):
        assert truncate_prompt("Multiple    spaces \t  should   be   cleaned", 50) == "Multiple spaces should be cleaned"
    
    def test_empty_prompt(self):
        assert truncate_prompt("", 10) == ""
    
    def test_very_short_limit(self):
        assert truncate_prompt("Hello world", 5) == "He..."
    
    @pytest.mark.parametrize("limit", [0, 1, 2, 3])
    def test_limit_below_ellipsis_never_exceeds_limit(self, limit):
        assert len(truncate_prompt("Hello world", limit)) <= limit
    
    def test_collapsing_happens_before_length_check(self):
        # Seven characters once collapsed, although the raw text is longer
        assert truncate_prompt("abc\n\n\n   def", 7) == "abc def"
    
    def test_default_preview_width(self):
        result = truncate_prompt("word " * 40, 60)
        
        assert len(result) == 60
        assert result.endswith("...")


class TestBackupTimestamp:
    
    def test_format(self):
        assert backup_timestamp(datetime(2024, 3, 9, 7, 5, 1)) == "20240309_070501"
    
    def test_current_time_shape(self):
        stamp = backup_timestamp()
        date_part, time_part = stamp.split("_")
        
        assert len(date_part) == 8 and date_part.isdigit()
        assert len(time_part) == 6 and time_part.isdigit()


class TestStdinHelpers:
    
    def test_read_prompt_trims(self):
        assert read_prompt_from_stdin(io.StringIO("\n  Explain this code\nin detail \n\n")) == "Explain this code\nin detail"
    
    @pytest.mark.parametrize("answer", ["y\n", "Y\n", "yes\n", "YES\n", "  yes  \n"])
    def test_confirm_accepts_yes(self, answer):
        assert confirm("Continue?", io.StringIO(answer), io.StringIO()) is True
    
    @pytest.mark.parametrize("answer", ["n\n", "\n", "yep\n", "no\n", ""])
    def test_confirm_rejects_everything_else(self, answer):
        assert confirm("Continue?", io.StringIO(answer), io.StringIO()) is False
    
    def test_confirm_prints_question(self):
        out = io.StringIO()
        confirm("Continue?", io.StringIO("n\n"), out)
        
        assert out.getvalue() == "Continue? (y/N): "
    
    def test_confirm_read_failure_cancels(self):
        class BrokenStream:
            def readline(self):
                raise OSError("stdin closed")
        
        assert confirm("Continue?", BrokenStream(), io.StringIO()) is False
