"""Verify links, anchors, and asset references in a generated CV site."""

from __future__ import annotations

from dataclasses import dataclass, field
from html.parser import HTMLParser
from pathlib import Path
from urllib.parse import unquote, urlsplit

IGNORED_SCHEMES = {"http", "https", "mailto", "tel", "data", "javascript", "ftp"}


@dataclass(slots=True)
class VerificationIssue:
    """Represents a problem discovered during site verification."""

    kind: str
    source: Path
    target: str
    message: str


@dataclass(slots=True)
class VerificationReport:
    """Aggregate verification results."""

    scanned_files: int
    issues: list[VerificationIssue] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.kind != "warning")

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.kind == "warning")


class _PageScanner(HTMLParser):
    """Collect href/src references and element ids from an HTML page."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.references: list[tuple[str, str, str]] = []
        self.ids: set[str] = set()

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        attr_map = {name: value for name, value in attrs if value is not None}
        element_id = attr_map.get("id")
        if element_id:
            self.ids.add(element_id)
        if tag in {"a", "link"} and "href" in attr_map:
            self.references.append((tag, "href", attr_map["href"]))
        if tag in {"img", "script", "source"} and attr_map.get("src"):
            self.references.append((tag, "src", attr_map["src"]))


def verify_site(output_dir: Path) -> VerificationReport:
    """Check every generated page for broken internal links and anchors."""
    output_dir = output_dir.resolve()
    html_files = sorted(output_dir.rglob("*.html"))
    issues: list[VerificationIssue] = []

    for html_file in html_files:
        try:
            html = html_file.read_text(encoding="utf-8")
        except OSError as exc:
            issues.append(
                VerificationIssue(
                    kind="error",
                    source=html_file,
                    target=str(html_file),
                    message=f"Unable to read HTML file: {exc}",
                )
            )
            continue

        scanner = _PageScanner()
        scanner.feed(html)

        for tag, attr, reference in scanner.references:
            issue = _check_reference(tag, attr, reference.strip(), html_file, output_dir, scanner.ids)
            if issue is not None:
                issues.append(issue)

    return VerificationReport(scanned_files=len(html_files), issues=issues)


def _check_reference(
    tag: str,
    attr: str,
    reference: str,
    source: Path,
    output_dir: Path,
    page_ids: set[str],
) -> VerificationIssue | None:
    if not reference:
        return None
    parsed = urlsplit(reference)
    if parsed.scheme in IGNORED_SCHEMES or parsed.netloc:
        return None

    path = unquote(parsed.path or "")
    if not path:
        fragment = unquote(parsed.fragment)
        if fragment and fragment not in page_ids:
            return VerificationIssue(
                kind="missing-anchor",
                source=source,
                target=reference,
                message=f"No element with id '{fragment}' for {tag} {attr} '{reference}'",
            )
        return None

    if path.startswith("/"):
        candidate = (output_dir / path.lstrip("/")).resolve()
    else:
        candidate = (source.parent / path).resolve()

    try:
        candidate.relative_to(output_dir)
    except ValueError:
        return VerificationIssue(
            kind="out-of-bounds",
            source=source,
            target=reference,
            message=f"Reference points outside the site bundle: '{reference}'",
        )

    if candidate.exists():
        if candidate.is_dir() and not (candidate / "index.html").exists():
            return _missing(tag, attr, reference, source)
        return None
    return _missing(tag, attr, reference, source)


def _missing(tag: str, attr: str, reference: str, source: Path) -> VerificationIssue:
    kind = "missing-page" if tag == "a" else "missing-asset"
    return VerificationIssue(
        kind=kind,
        source=source,
        target=reference,
        message=f"Missing target for {tag} {attr} '{reference}'",
    )
