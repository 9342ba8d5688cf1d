"""
Main scanning engine for methodlint.

This module orchestrates the scanning process, coordinating between
front ends, rules and the scan result.
"""

import dataclasses
import logging
import os
import time
from pathlib import Path
from typing import List, Dict, Any, Optional, Set, Generator
from concurrent.futures import ThreadPoolExecutor, as_completed
import fnmatch

from methodlint.core.errors import MalformedTreeError, ParseError
from methodlint.core.findings import Diagnostic, ScanResult, Severity
from methodlint.core.rules import Rule, AnalysisContext, registry
from methodlint.core.tree import SyntaxNode

# Import rules to register them with the registry
import methodlint.rules  # noqa: F401

logger = logging.getLogger(__name__)


# Language detection by file extension
LANGUAGE_EXTENSIONS: Dict[str, List[str]] = {
    "java": [".java"],
    "python": [".py", ".pyw"],
}

# Reverse mapping for quick lookup
EXTENSION_TO_LANGUAGE: Dict[str, str] = {}
for lang, exts in LANGUAGE_EXTENSIONS.items():
    for ext in exts:
        EXTENSION_TO_LANGUAGE[ext] = lang


# Default ignore patterns
DEFAULT_IGNORE_PATTERNS = [
    ".git/**",
    ".svn/**",
    "__pycache__/**",
    "*.pyc",
    ".tox/**",
    "venv/**",
    ".venv/**",
    "build/**",
    "dist/**",
    "target/**",
    "out/**",
    ".gradle/**",
    ".idea/**",
    ".vscode/**",
    "*.egg-info/**",
]


class ScanEngine:
    """
    Main scanning engine that orchestrates the analysis process.

    The engine:
    1. Discovers files in the target directory
    2. Detects languages based on file extensions
    3. Parses files with the matching front end
    4. Runs the active rules on each tree
    5. Collects and returns diagnostics
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.registry = registry
        self.errors: List[str] = []

        # Configuration options
        self.max_file_size = self.config.get("max_file_size", 1024 * 1024)  # 1MB
        self.max_workers = self.config.get("max_workers", 4)
        self.ignore_patterns = self.config.get("ignore_patterns", DEFAULT_IGNORE_PATTERNS)
        self.include_patterns = self.config.get("include_patterns", None)
        self.languages = self.config.get("languages", None)
        self.severity_threshold = Severity(self.config.get("severity_threshold", "warning"))
        self.rule_config = self.config.get("rules", {})

    def _record_error(self, message: str):
        logger.error(message)
        self.errors.append(message)

    def get_rules(self, language: str) -> List[Rule]:
        """Return the rules active for ``language`` under this engine's config."""
        return self.registry.get_rules_for_language(
            language,
            enabled=set(self.rule_config.get("enabled", [])),
            disabled=set(self.rule_config.get("disabled", [])),
        )

    def detect_language(self, file_path: str) -> Optional[str]:
        """Detect the programming language of a file."""
        ext = os.path.splitext(file_path)[1].lower()
        language = EXTENSION_TO_LANGUAGE.get(ext)
        if language and self.languages and language not in self.languages:
            return None
        return language

    def should_ignore(self, file_path: str, base_path: str) -> bool:
        """Check if a file should be ignored based on patterns."""
        rel_path = os.path.relpath(file_path, base_path)

        for pattern in self.ignore_patterns:
            if fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(os.path.basename(file_path), pattern):
                return True

        return False

    def is_included(self, file_path: str, base_path: str) -> bool:
        """Check a file against the include patterns, if any are set."""
        if not self.include_patterns:
            return True
        rel_path = os.path.relpath(file_path, base_path)
        return any(
            fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(os.path.basename(file_path), pattern)
            for pattern in self.include_patterns
        )

    def discover_files(self, target_path: str) -> Generator[str, None, None]:
        """Discover all files to scan in the target path."""
        target = Path(target_path)

        if target.is_file():
            yield str(target)
            return

        for root, dirs, files in os.walk(target):
            # Filter out ignored directories
            dirs[:] = sorted(d for d in dirs if not self.should_ignore(os.path.join(root, d), target_path))

            for file in sorted(files):
                file_path = os.path.join(root, file)

                if self.should_ignore(file_path, target_path):
                    continue
                if not self.is_included(file_path, target_path):
                    continue

                # Check file size
                try:
                    if os.path.getsize(file_path) > self.max_file_size:
                        logger.info("Skipping %s: larger than %d bytes", file_path, self.max_file_size)
                        continue
                except OSError:
                    continue

                # Only include files with recognized extensions
                if self.detect_language(file_path):
                    yield file_path

    def read_file(self, file_path: str) -> Optional[str]:
        """Read a file's contents."""
        try:
            with open(file_path, "r", encoding="utf-8", errors="ignore") as f:
                return f.read()
        except OSError as e:
            self._record_error(f"Error reading {file_path}: {e}")
            return None

    def parse_file(self, file_path: str, content: str, language: str) -> Optional[SyntaxNode]:
        """
        Parse a file into a syntax tree.

        Returns the tree, or None if there is no front end for the
        language or the source does not parse.
        """
        from methodlint.parsers import get_parser

        parser = get_parser(language)
        if parser is None:
            logger.debug("No parser for language %s", language)
            return None

        try:
            return parser.parse(content, file_path)
        except ParseError as e:
            self._record_error(f"Error parsing {file_path}: {e}")
            return None

    def create_context(
        self,
        file_path: str,
        content: str,
        language: str,
        tree: Optional[SyntaxNode] = None,
    ) -> AnalysisContext:
        """Create an analysis context for a file."""
        return AnalysisContext(
            file_path=file_path,
            tree=tree,
            language=language,
            content=content,
            config=self.config,
        )

    def run_rules(self, context: AnalysisContext) -> List[Diagnostic]:
        """Run every active rule over one context and return the kept diagnostics."""
        diagnostics: List[Diagnostic] = []

        if context.tree is None:
            return diagnostics

        for rule in self.get_rules(context.language):
            rule_id = rule.metadata.rule_id
            try:
                for diagnostic in rule.analyze(context):
                    if context.is_line_suppressed(diagnostic.location.start_line):
                        diagnostic = dataclasses.replace(diagnostic, suppressed=True)

                    # Filter by severity threshold
                    if diagnostic.severity >= self.severity_threshold:
                        diagnostics.append(diagnostic)

            except MalformedTreeError as e:
                self._record_error(f"Malformed tree in {context.file_path} ({rule_id}): {e}")
            except Exception as e:
                logger.debug("Rule %s failed", rule_id, exc_info=True)
                self._record_error(f"Error running rule {rule_id} on {context.file_path}: {e}")

        return diagnostics

    def scan_file(self, file_path: str) -> List[Diagnostic]:
        """Scan a single file and return diagnostics."""
        content = self.read_file(file_path)
        if content is None:
            return []

        language = self.detect_language(file_path)
        if not language:
            return []

        logger.debug("Scanning %s (%s)", file_path, language)
        tree = self.parse_file(file_path, content, language)
        context = self.create_context(file_path, content, language, tree)
        return self.run_rules(context)

    def scan(self, target_path: str) -> ScanResult:
        """
        Scan a target path and return results.

        Args:
            target_path: Path to a file or directory to scan.

        Returns:
            ScanResult containing all diagnostics and metadata.
        """
        start_time = time.time()
        self.errors = []
        all_diagnostics: List[Diagnostic] = []
        languages_detected: Set[str] = set()
        files_scanned = 0

        if not os.path.exists(target_path):
            self._record_error(f"Path not found: {target_path}")

        # Discover files
        files = list(self.discover_files(target_path))
        logger.info("Discovered %d file(s) under %s", len(files), target_path)

        # Scan files (parallel if multiple)
        if len(files) > 1 and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {executor.submit(self.scan_file, f): f for f in files}

                for future in as_completed(futures):
                    file_path = futures[future]
                    try:
                        all_diagnostics.extend(future.result())
                        files_scanned += 1

                        lang = self.detect_language(file_path)
                        if lang:
                            languages_detected.add(lang)

                    except Exception as e:
                        self._record_error(f"Error scanning {file_path}: {e}")
        else:
            for file_path in files:
                try:
                    all_diagnostics.extend(self.scan_file(file_path))
                    files_scanned += 1

                    lang = self.detect_language(file_path)
                    if lang:
                        languages_detected.add(lang)

                except Exception as e:
                    self._record_error(f"Error scanning {file_path}: {e}")

        rules_applied = {d.rule_id for d in all_diagnostics}

        # Source order within a file, then most severe first
        all_diagnostics.sort(key=lambda d: (
            d.location.file_path, d.location.start_line, d.location.start_column, d.rule_id
        ))
        all_diagnostics.sort(key=lambda d: d.severity, reverse=True)

        elapsed_time = time.time() - start_time

        return ScanResult(
            diagnostics=all_diagnostics,
            files_scanned=files_scanned,
            scan_time_seconds=round(elapsed_time, 3),
            languages_detected=sorted(languages_detected),
            rules_applied=sorted(rules_applied),
            errors=list(self.errors),
        )

    def scan_content(self, content: str, language: str, file_path: str = "<stdin>") -> List[Diagnostic]:
        """
        Scan code content directly without reading from a file.

        Useful for editor integrations and testing.
        """
        tree = self.parse_file(file_path, content, language)
        context = self.create_context(file_path, content, language, tree)
        return self.run_rules(context)

    def analyze_tree(
        self,
        tree: SyntaxNode,
        file_path: str = "<tree>",
        language: str = "unknown",
    ) -> List[Diagnostic]:
        """
        Run the active rules over a tree built by the caller.

        No source text is available, so inline suppression does not apply.
        """
        context = self.create_context(file_path, "", language, tree)
        return self.run_rules(context)


def create_engine(config_path: Optional[str] = None, **kwargs) -> ScanEngine:
    """
    Create a scan engine with configuration.

    Args:
        config_path: Optional path to a configuration file.
        **kwargs: Additional configuration options.

    Returns:
        Configured ScanEngine instance.
    """
    config = {}

    if config_path:
        from methodlint.config import load_scan_config
        config = load_scan_config(config_path).to_engine_config()

    config.update(kwargs)

    return ScanEngine(config)
