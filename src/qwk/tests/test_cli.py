"""
CLI tests.

Tests argument parsing and the structured command handlers against a
temporary config directory.
"""

import io
import json

import pytest

from qwk.cli import create_parser, handle_cli_command, parse_args
from qwk.storage import AliasStore, AgentStore


def run_command(config, argv, stdin_text=""):
    """Parse and handle ``argv``; return (exit_code, stdout, stderr)."""
    stdout, stderr = io.StringIO(), io.StringIO()
    code = handle_cli_command(parse_args(argv), config, io.StringIO(stdin_text), stdout, stderr)
    return code, stdout.getvalue(), stderr.getvalue()


class TestParser:
    
    def test_set_with_prompt(self):
        args = parse_args(["--set", "review", "Review this code"])
        assert args.set == ["review", "Review this code"]
    
    def test_set_without_prompt(self):
        assert parse_args(["--set", "review"]).set == ["review"]
    
    def test_set_with_too_many_values(self):
        with pytest.raises(SystemExit):
            parse_args(["--set", "review", "Review", "this"])
    
    def test_commands_are_mutually_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["--list", "--reset"])
    
    @pytest.mark.parametrize("argv, partial", [
        (["--complete"], ""),
        (["--complete", "re"], "re"),
        (["--complete=re"], "re"),
        (["--complete=--s"], "--s"),
        (["--complete", "--s"], "--s"),
        (["--complete="], ""),
    ])
    def test_complete_partial(self, argv, partial):
        assert parse_args(argv).complete == partial
    
    def test_complete_hidden_from_help(self):
        assert "--complete" not in create_parser().format_help()
    
    def test_help_lists_commands(self):
        text = create_parser().format_help()
        for flag in ("--set", "--agent", "--list", "--remove", "--reset", "--setup-completion"):
            assert flag in text


class TestSetCommand:
    
    def test_set_prompt_argument(self, config):
        code, out, _ = run_command(config, ["--set", "review", "Review the diff"])
        
        assert code == 0
        assert "Alias 'review' set successfully" in out
        assert AliasStore(config).load() == {"review": "Review the diff"}
    
    def test_set_prompt_from_stdin(self, config):
        code, _, _ = run_command(config, ["--set", "sum"], stdin_text="\nSummarize\nthe repo\n\n")
        
        assert code == 0
        assert AliasStore(config).get("sum") == "Summarize\nthe repo"
    
    def test_set_overwrites(self, config):
        run_command(config, ["--set", "a", "one"])
        run_command(config, ["--set", "a", "two"])
        
        assert AliasStore(config).load() == {"a": "two"}
    
    @pytest.mark.parametrize("name", ["", "--list"])
    def test_set_rejects_undispatchable_names(self, config, name):
        args = parse_args(["--set", "placeholder", "prompt"])
        args.set = [name, "prompt"]
        stderr = io.StringIO()
        
        code = handle_cli_command(args, config, io.StringIO(), io.StringIO(), stderr)
        err = stderr.getvalue()
        
        assert code == 1
        assert "Alias name" in err
        assert not config.aliases_file.exists()


class TestAgentCommand:
    
    def test_agent_stored_verbatim(self, config):
        code, out, _ = run_command(config, ["--agent", "claude --model 'opus 4'"])
        
        assert code == 0
        assert "Agent set to 'claude --model 'opus 4''" in out
        assert config.agent_file.read_text() == "claude --model 'opus 4'"
        assert AgentStore(config).get() == "claude --model 'opus 4'"


class TestListCommand:
    
    def test_empty(self, config):
        code, out, _ = run_command(config, ["--list"])
        
        assert code == 0
        assert out == "No shortcuts available.\n"
    
    def test_sorted_with_previews(self, config):
        AliasStore(config).save({
            "zeta": "last",
            "alpha": "first line\nsecond   line",
            "long": "x" * 100,
        })
        
        code, out, _ = run_command(config, ["--list"])
        
        assert code == 0
        assert out.splitlines() == [
            "Available shortcuts:",
            "  alpha - first line second line",
            "  long - " + "x" * 57 + "...",
            "  zeta - last",
        ]
    
    def test_preview_width_from_config(self, config):
        config.preview_width = 10
        AliasStore(config).save({"a": "abcdefghijklmnop"})
        
        _, out, _ = run_command(config, ["--list"])
        
        assert "  a - abcdefg..." in out


class TestRemoveCommand:
    
    def test_remove_existing(self, config):
        AliasStore(config).save({"a": "1", "b": "2"})
        
        code, out, _ = run_command(config, ["--remove", "a"])
        
        assert code == 0
        assert "Shortcut 'a' removed successfully" in out
        assert AliasStore(config).load() == {"b": "2"}
    
    def test_remove_missing_is_not_an_error(self, config):
        AliasStore(config).save({"b": "2"})
        
        code, out, err = run_command(config, ["--remove", "a"])
        
        assert code == 0
        assert "Shortcut 'a' does not exist" in out
        assert err == ""
        assert AliasStore(config).load() == {"b": "2"}


class TestResetCommand:
    
    def test_confirmed_reset_backs_up_and_clears(self, config):
        AliasStore(config).save({"a": "1"})
        AgentStore(config).set("codex")
        
        code, out, _ = run_command(config, ["--reset"], stdin_text="yes\n")
        
        assert code == 0
        assert "Backup created:" in out
        assert "All shortcuts have been reset." in out
        assert not config.aliases_file.exists()
        backups = list(config.config_dir.glob("aliases_backup_*.json"))
        assert len(backups) == 1
        assert json.loads(backups[0].read_text()) == {"a": "1"}
        assert AgentStore(config).get() == "codex"
    
    def test_reset_without_aliases_file(self, config):
        code, out, _ = run_command(config, ["--reset"], stdin_text="y\n")
        
        assert code == 0
        assert "No existing aliases file to backup." in out
        assert "All shortcuts have been reset." in out
    
    @pytest.mark.parametrize("answer", ["n\n", "\n", "maybe\n", ""])
    def test_unconfirmed_reset_changes_nothing(self, config, answer):
        AliasStore(config).save({"a": "1"})
        
        code, out, _ = run_command(config, ["--reset"], stdin_text=answer)
        
        assert code == 0
        assert "Reset cancelled." in out
        assert AliasStore(config).load() == {"a": "1"}
        assert list(config.config_dir.glob("aliases_backup_*.json")) == []


class TestCompleteCommand:
    
    def test_prints_one_candidate_per_line(self, config):
        AliasStore(config).save({"review": "x", "refactor": "y"})
        
        code, out, _ = run_command(config, ["--complete", "re"])
        
        assert code == 0
        assert out == "refactor\nreview\n"
    
    def test_no_partial_prints_everything(self, config):
        AliasStore(config).save({"review": "x"})
        
        _, out, _ = run_command(config, ["--complete"])
        
        assert "review" in out.splitlines()
        assert "--set" in out.splitlines()


class TestSetupCompletionCommand:
    
    def test_setup(self, config, home_dir):
        code, out, _ = run_command(config, ["--setup-completion"])
        
        assert code == 0
        assert "Autocompletion set up for bash!" in out
        assert "_qwk_complete" in (home_dir / ".bash_profile").read_text()
    
    def test_setup_failure_exit_code(self, config):
        config.shell = "/bin/csh"
        
        code, _, err = run_command(config, ["--setup-completion"])
        
        assert code == 1
        assert "Error setting up autocompletion: Could not detect current shell" in err
