"""
Tests for the command-line interface.
"""

import json
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from methodlint.cli import main, create_parser


TOO_MANY_LOOPS = "class Worker {\n    void process() {\n" + (
    "        while (true) { break; }\n" * 9
) + "    }\n}\n"


class TestCLI:
    """Tests for the methodlint command."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "methodlint" in capsys.readouterr().out

    def test_parser_defaults(self):
        args = create_parser().parse_args(["scan"])
        assert args.target == "."
        assert args.format is None

    def test_scan_clean_exit_code(self, tmp_path, capsys):
        (tmp_path / "clean.py").write_text("def total(first, second):\n    return first + second\n")
        assert main(["scan", str(tmp_path), "--no-color"]) == 0
        assert "No issues found!" in capsys.readouterr().out

    def test_scan_warning_exit_code(self, tmp_path):
        (tmp_path / "worker.py").write_text("def process(client):\n    return foo(client)\n")
        assert main(["scan", str(tmp_path), "--no-color"]) == 1

    def test_scan_error_exit_code(self, tmp_path, capsys):
        (tmp_path / "Worker.java").write_text(TOO_MANY_LOOPS)
        assert main(["scan", str(tmp_path), "--format", "json"]) == 2
        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["by_severity"]["error"] == 1

    def test_scan_disable_rule(self, tmp_path):
        (tmp_path / "worker.py").write_text("def process(client):\n    return foo(client)\n")
        assert main(["scan", str(tmp_path), "--disable", "BadNames"]) == 0

    def test_scan_parse_error_exit_code(self, tmp_path):
        (tmp_path / "broken.py").write_text("def broken(:\n")
        assert main(["scan", str(tmp_path), "--quiet"]) == 1

    def test_scan_output_file(self, tmp_path):
        (tmp_path / "Worker.java").write_text(TOO_MANY_LOOPS)
        out = tmp_path / "report.sarif"
        main(["scan", str(tmp_path / "Worker.java"), "-f", "sarif", "-o", str(out)])
        sarif = json.loads(out.read_text())
        assert sarif["runs"][0]["results"][0]["ruleId"] == "BadCyclomaticComplexity"

    def test_scan_uses_config_file(self, tmp_path):
        (tmp_path / ".methodlint.yaml").write_text("rules:\n  disabled:\n    - BadNames\n")
        (tmp_path / "worker.py").write_text("def process(client):\n    return foo(client)\n")
        assert main(["scan", str(tmp_path)]) == 0

    def test_invalid_config_reports_error(self, tmp_path, capsys):
        config = tmp_path / "bad.yaml"
        config.write_text("severity_threshold: critical\n")
        assert main(["scan", str(tmp_path), "-c", str(config)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_init(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(["init"]) == 0
        assert (tmp_path / ".methodlint.yaml").exists()
        assert main(["init"]) == 1
        assert main(["init", "--force"]) == 0

    def test_list_rules(self, capsys):
        assert main(["list-rules"]) == 0
        out = capsys.readouterr().out
        assert "BadCyclomaticComplexity" in out
        assert "BadNames" in out
        assert "Total: 2 rules" in out

    def test_list_rules_by_category(self, capsys):
        assert main(["list-rules", "--category", "naming"]) == 0
        out = capsys.readouterr().out
        assert "BadNames" in out
        assert "BadCyclomaticComplexity" not in out
