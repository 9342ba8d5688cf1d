"""
CLI output formatter for human-readable results.
"""

from typing import Dict, List
import sys

from methodlint.core.findings import Diagnostic, ScanResult, Severity


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"


def supports_color() -> bool:
    """Check if the terminal supports color output."""
    if not hasattr(sys.stdout, "isatty"):
        return False
    if not sys.stdout.isatty():
        return False
    return True


class CLIFormatter:
    """
    Formats scan results for human-readable CLI output.
    """

    def __init__(self, use_color: bool = True, verbose: bool = False, show_suppressed: bool = False):
        self.use_color = use_color and supports_color()
        self.verbose = verbose
        self.show_suppressed = show_suppressed

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_color:
            return f"{color}{text}{Colors.RESET}"
        return text

    def _severity_color(self, severity: Severity) -> str:
        colors = {
            Severity.ERROR: Colors.RED,
            Severity.WARNING: Colors.YELLOW,
        }
        return colors.get(severity, "")

    def _severity_label(self, severity: Severity) -> str:
        """Get a formatted severity label."""
        return self._color(f"[{severity.value.upper()}]", self._severity_color(severity))

    def format_result(self, result: ScanResult) -> str:
        """Format a complete scan result."""
        lines = []

        # Header
        lines.append("")
        lines.append(self._color("=" * 70, Colors.DIM))
        lines.append(self._color(" METHODLINT RESULTS ", Colors.BOLD))
        lines.append(self._color("=" * 70, Colors.DIM))
        lines.append("")

        # Summary
        lines.append(self._color("Summary", Colors.BOLD))
        lines.append(self._color("-" * 40, Colors.DIM))
        lines.append(f"  Files scanned:     {result.files_scanned}")
        lines.append(f"  Languages:         {', '.join(result.languages_detected)}")
        lines.append(f"  Scan time:         {result.scan_time_seconds:.2f}s")
        lines.append(f"  Rules triggered:   {len(result.rules_applied)}")
        lines.append("")

        # Diagnostics summary
        lines.append(self._color("Diagnostics", Colors.BOLD))
        lines.append(self._color("-" * 40, Colors.DIM))

        if result.total_diagnostics == 0:
            lines.append(self._color("  No issues found!", Colors.GREEN))
        else:
            lines.append(f"  {self._severity_label(Severity.ERROR)} {result.error_count}")
            lines.append(f"  {self._severity_label(Severity.WARNING)} {result.warning_count}")

        if result.suppressed_count > 0:
            lines.append(f"  Suppressed:        {result.suppressed_count}")

        lines.append("")

        # Group by file
        by_file: Dict[str, List[Diagnostic]] = {}
        for diagnostic in result.diagnostics:
            if diagnostic.suppressed and not self.show_suppressed:
                continue
            by_file.setdefault(diagnostic.location.file_path, []).append(diagnostic)

        if by_file:
            lines.append(self._color("=" * 70, Colors.DIM))
            lines.append(self._color(" DETAILS ", Colors.BOLD))
            lines.append(self._color("=" * 70, Colors.DIM))
            lines.append("")

            for file_path, diagnostics in by_file.items():
                lines.append(self._color(file_path, Colors.CYAN))
                lines.append("")

                for diagnostic in diagnostics:
                    lines.extend(self._format_diagnostic(diagnostic))
                    lines.append("")

        # Errors
        if result.errors:
            lines.append(self._color("=" * 70, Colors.DIM))
            lines.append(self._color(" ERRORS ", Colors.RED))
            lines.append(self._color("=" * 70, Colors.DIM))
            for error in result.errors:
                lines.append(f"  - {error}")
            lines.append("")

        return "\n".join(lines)

    def _format_diagnostic(self, diagnostic: Diagnostic) -> List[str]:
        lines = []

        severity_label = self._severity_label(diagnostic.severity)
        location = f"{diagnostic.location.file_path}:{diagnostic.location.start_line}"

        if diagnostic.suppressed:
            title = self._color(f"[SUPPRESSED] {diagnostic.title}", Colors.DIM)
        else:
            title = self._color(diagnostic.title, Colors.BOLD)

        lines.append(f"  {severity_label} {title}")
        lines.append(f"  {self._color('Location:', Colors.DIM)} {location}")
        lines.append(f"  {self._color('Rule:', Colors.DIM)} {diagnostic.rule_id}")

        # Complexity messages carry their details on the following lines
        details = diagnostic.message.splitlines()[1:]
        if details:
            lines.append("")
            for detail in details:
                lines.append(f"  {detail}")

        if self.verbose and diagnostic.metadata:
            lines.append("")
            for key, value in diagnostic.metadata.items():
                lines.append(self._color(f"    {key}: {value}", Colors.DIM))

        lines.append(self._color("  " + "-" * 66, Colors.DIM))

        return lines

    def format_diagnostic(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic."""
        return "\n".join(self._format_diagnostic(diagnostic))
