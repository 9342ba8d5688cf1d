"""
Tests for the scan engine.
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from methodlint.core.engine import ScanEngine, create_engine
from methodlint.core.findings import Severity
from methodlint.core.tree import SyntaxNode, NodeKind, LoopVariant


COMPLEX_JAVA = """
class Worker {
    void process(int[] values) {
        for (int index = 0; index < values.length; index++) { }
        for (int index = 0; index < values.length; index++) { }
        for (int index = 0; index < values.length; index++) { }
        for (int index = 0; index < values.length; index++) { }
        for (int index = 0; index < values.length; index++) { }
        for (int index = 0; index < values.length; index++) { }
    }
}
"""

CLEAN_JAVA = """
class Clean {
    int total(int first, int second) {
        return first + second;
    }
}
"""


class TestScanEngine:
    """Tests for the main scan engine."""

    def test_engine_with_config(self):
        engine = ScanEngine({"severity_threshold": "warning", "max_workers": 2})
        assert engine.severity_threshold == Severity.WARNING
        assert engine.max_workers == 2

    def test_language_detection(self):
        engine = ScanEngine()
        assert engine.detect_language("Worker.java") == "java"
        assert engine.detect_language("worker.py") == "python"
        assert engine.detect_language("README.md") is None

    def test_language_filter(self):
        engine = ScanEngine({"languages": ["java"]})
        assert engine.detect_language("worker.py") is None

    def test_scan_content_java(self):
        engine = ScanEngine()
        diagnostics = engine.scan_content(COMPLEX_JAVA, "java", "Worker.java")
        complexity = [d for d in diagnostics if d.rule_id == "BadCyclomaticComplexity"]
        assert len(complexity) == 1
        assert complexity[0].severity == Severity.WARNING
        assert complexity[0].language == "java"
        assert complexity[0].location.start_line == 3
        assert "Loop count        : 6" in complexity[0].message

    def test_scan_content_python(self):
        engine = ScanEngine()
        code = "def process(client):\n    return client.foo()\n"
        diagnostics = engine.scan_content(code, "python", "worker.py")
        assert [d.message for d in diagnostics] == ["foo is a bad identifier name"]

    def test_constructor_of_short_class_not_reported(self):
        engine = ScanEngine()
        code = "class Box { private int width; Box(int width) { this.width = width; } }"
        assert engine.scan_content(code, "java", "Box.java") == []

    def test_constructor_parameters_still_checked(self):
        engine = ScanEngine()
        code = "class My_Parser { My_Parser(int x1) { } }"
        diagnostics = engine.scan_content(code, "java", "My_Parser.java")
        assert [d.message for d in diagnostics] == ["x1 is not a valid parameter name"]

    def test_switch_value_does_not_raise_branch_count(self):
        labels = "".join(f"            case {n} -> {n * 10};\n" for n in range(1, 9))
        code = (
            "class Router {\n"
            "    int compute(int value) {\n"
            "        int result = switch (value) {\n"
            f"{labels}"
            "            default -> 0;\n"
            "        };\n"
            "        return result;\n"
            "    }\n"
            "}\n"
        )
        assert ScanEngine().scan_content(code, "java", "Router.java") == []

    def test_python_assignment_matches_java_declaration(self):
        engine = ScanEngine()
        python_code = "def compute(value):\n    x = value\n    return value\n"
        java_code = "class Sample { int compute(int value) { int x = value; return value; } }"
        assert engine.scan_content(python_code, "python", "sample.py") == []
        assert engine.scan_content(java_code, "java", "Sample.java") == []

    def test_inline_suppression(self):
        engine = ScanEngine()
        code = "def process(client):\n    return foo(client)  # methodlint: ignore\n"
        diagnostics = engine.scan_content(code, "python", "worker.py")
        assert diagnostics
        assert all(d.suppressed for d in diagnostics)

    def test_suppression_on_previous_line(self):
        engine = ScanEngine()
        code = "def process(client):\n    # noqa\n    return foo(client)\n"
        diagnostics = engine.scan_content(code, "python", "worker.py")
        assert diagnostics
        assert all(d.suppressed for d in diagnostics)

    def test_disabled_rule(self):
        engine = ScanEngine({"rules": {"disabled": ["BadNames"]}})
        code = "def process(client):\n    return foo(client)\n"
        assert engine.scan_content(code, "python", "worker.py") == []

    def test_severity_threshold(self):
        engine = ScanEngine({"severity_threshold": "error"})
        assert engine.scan_content(COMPLEX_JAVA, "java", "Worker.java") == []

    def test_parse_error_recorded(self):
        engine = ScanEngine()
        assert engine.scan_content("def broken(:\n", "python", "broken.py") == []
        assert any("broken.py" in e for e in engine.errors)

    def test_analyze_tree(self):
        engine = ScanEngine()
        body = SyntaxNode.block(*[SyntaxNode.loop(LoopVariant.FOR) for _ in range(9)])
        tree = SyntaxNode.block(SyntaxNode.method("process", body=body))
        diagnostics = engine.analyze_tree(tree)
        assert len(diagnostics) == 1
        assert diagnostics[0].severity == Severity.ERROR
        assert diagnostics[0].location.file_path == "<tree>"

    def test_malformed_tree_recorded_not_swallowed(self, caplog):
        engine = ScanEngine()
        tree = SyntaxNode.block(
            SyntaxNode.method("process", body=SyntaxNode.block(
                SyntaxNode.call(SyntaxNode(NodeKind.OTHER, node_type="lambda")),
            )),
        )
        engine.analyze_tree(tree, file_path="Host.java")
        assert len(engine.errors) == 1
        assert "Malformed tree in Host.java" in engine.errors[0]
        assert "is malformed." in engine.errors[0]
        assert "Malformed tree in Host.java" in caplog.text


class TestScanDirectory:
    """Tests for scanning files on disk."""

    def test_scan_directory(self, tmp_path):
        (tmp_path / "Worker.java").write_text(COMPLEX_JAVA)
        (tmp_path / "Clean.java").write_text(CLEAN_JAVA)
        (tmp_path / "notes.txt").write_text("not code")

        result = ScanEngine().scan(str(tmp_path))

        assert result.files_scanned == 2
        assert result.languages_detected == ["java"]
        assert result.rules_applied == ["BadCyclomaticComplexity"]
        assert result.warning_count == 1
        assert result.errors == []

    def test_scan_single_file(self, tmp_path):
        path = tmp_path / "Worker.java"
        path.write_text(COMPLEX_JAVA)
        result = ScanEngine().scan(str(path))
        assert result.files_scanned == 1
        assert result.total_diagnostics == 1

    def test_ignore_patterns(self, tmp_path):
        build = tmp_path / "build"
        build.mkdir()
        (build / "Worker.java").write_text(COMPLEX_JAVA)
        result = ScanEngine().scan(str(tmp_path))
        assert result.files_scanned == 0

    def test_include_patterns(self, tmp_path):
        (tmp_path / "Worker.java").write_text(COMPLEX_JAVA)
        (tmp_path / "worker.py").write_text("def process(value):\n    return value\n")
        result = ScanEngine({"include_patterns": ["*.py"]}).scan(str(tmp_path))
        assert result.files_scanned == 1
        assert result.languages_detected == ["python"]

    def test_parallel_scan_is_ordered(self, tmp_path):
        for n in range(6):
            (tmp_path / f"Worker{n}.java").write_text(COMPLEX_JAVA)
        result = ScanEngine({"max_workers": 4}).scan(str(tmp_path))
        paths = [os.path.basename(d.location.file_path) for d in result.diagnostics]
        assert paths == [f"Worker{n}.java" for n in range(6)]

    def test_missing_path_recorded(self, tmp_path):
        result = ScanEngine().scan(str(tmp_path / "missing"))
        assert result.files_scanned == 0
        assert result.errors

    def test_create_engine_from_config(self, tmp_path):
        config_path = tmp_path / ".methodlint.yaml"
        config_path.write_text("severity_threshold: error\nrules:\n  disabled:\n    - BadNames\n")
        engine = create_engine(str(config_path), max_workers=1)
        assert engine.severity_threshold == Severity.ERROR
        assert engine.max_workers == 1
        assert [r.metadata.rule_id for r in engine.get_rules("java")] == ["BadCyclomaticComplexity"]
