"""
Cleanup of pdftotext output for Congressional Record Daily Digest PDFs.

The raw text carries page headers and footers, page signature codes, stray
letters from the masthead artwork and extractor warnings. Cleaning runs four
stages in a single forward pass:

1. truncate at the "Congressional Record" trailer line
2. drop artifact lines and trim what is left
3. collapse runs of blank lines to one
4. mark known section names as "## " headings
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

STOP_MARKER = "Congressional Record"
HEADING_MARKER = "## "


@dataclass(frozen=True)
class ArtifactRule:
    """A named pattern; a line matching it is discarded."""
    name: str
    pattern: re.Pattern

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None


def _rule(name: str, pattern: str) -> ArtifactRule:
    return ArtifactRule(name, re.compile(pattern, re.ASCII))


ARTIFACT_RULES: Tuple[ArtifactRule, ...] = (
    _rule("verdate", r"^VerDate"),
    _rule("dmwilson", r"^DMWilson on DSK"),
    _rule("e_file_code", r"^E:\S+"),
    _rule("page_reference", r"^\s*Page \w+"),
    _rule("page_signature", r"^\s*D\d+\s*$"),     # e.g. D847
    _rule("syntax_warning", r"^Syntax Warning:"),
    _rule("uppercase_only", r"^[A-Z ]{2,}$"),     # running headers; also eats all-caps content
    _rule("fragment_e_pl", r"^E PL$"),
    _rule("fragment_m", r"^M$"),
    _rule("fragment_ur", r"^UR$"),
    _rule("fragment_ib_nu", r"^IB\s*NU$"),
    _rule("fragment_u", r"^U$"),
    _rule("fragment_s", r"^S$"),
)

SECTION_HEADINGS: Tuple[str, ...] = (
    "Daily Digest",
    "Senate",
    "House of Representatives",
    "Joint Meetings",
    "Committee Meetings",
    "Extensions of Remarks",
    "Next Meeting of the SENATE",
    "Next Meeting of the HOUSE OF REPRESENTATIVES",
)


_LINE_BREAK = re.compile(r"\r?\n|\f")


def split_lines(text: str) -> List[str]:
    """Split extractor output on LF, CRLF and form feed only.

    Other Unicode line separators stay inside their line. A trailing break
    ends the last line rather than opening an empty one.
    """
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def matching_rule(line: str, rules: Sequence[ArtifactRule] = ARTIFACT_RULES) -> Optional[ArtifactRule]:
    """First rule matching the line as given or trimmed, else None."""
    stripped = line.strip()
    for rule in rules:
        if rule.matches(line) or rule.matches(stripped):
            return rule
    return None


def is_artifact(line: str, rules: Sequence[ArtifactRule] = ARTIFACT_RULES) -> bool:
    return matching_rule(line, rules) is not None


def truncate_at_stop_marker(lines: Iterable[str], marker: str = STOP_MARKER) -> List[str]:
    """Lines before the first one whose trimmed text equals ``marker``."""
    kept = []
    for line in lines:
        if line.strip() == marker:
            break
        kept.append(line)
    return kept


def filter_artifacts(lines: Iterable[str], rules: Sequence[ArtifactRule] = ARTIFACT_RULES) -> List[str]:
    """Drop artifact lines and trim the survivors.

    Blank lines are kept as empty strings only between two content lines,
    where they mark a paragraph break. Blanks before the first or after the
    last content line are dropped with the other artifacts. Internal
    whitespace of content lines is left alone.
    """
    kept = []
    for line in lines:
        stripped = line.strip()
        if not stripped:
            kept.append("")
            continue
        if matching_rule(line, rules) is None:
            kept.append(stripped)

    start = 0
    while start < len(kept) and not kept[start]:
        start += 1
    end = len(kept)
    while end > start and not kept[end - 1]:
        end -= 1
    return kept[start:end]


def collapse_blank_lines(lines: Iterable[str]) -> List[str]:
    """Reduce every run of empty lines to a single empty line."""
    result = []
    previous_blank = False
    for line in lines:
        if line:
            result.append(line)
            previous_blank = False
        elif not previous_blank:
            result.append("")
            previous_blank = True
    return result


def promote_headings(lines: Iterable[str],
                     headings: Sequence[str] = SECTION_HEADINGS,
                     marker: str = HEADING_MARKER) -> List[str]:
    """Prefix lines starting with a known section name with the heading marker.

    A line gets the marker at most once, however many names it matches.
    """
    result = []
    for line in lines:
        if any(line.startswith(heading) for heading in headings):
            line = marker + line
        result.append(line)
    return result


class TextCleaner:
    """Configurable form of the cleaning stages.

    The defaults reproduce ``clean_lines``; the rule set, heading names and
    markers can be swapped for related document families.
    """

    def __init__(self,
                 rules: Sequence[ArtifactRule] = ARTIFACT_RULES,
                 headings: Sequence[str] = SECTION_HEADINGS,
                 stop_marker: str = STOP_MARKER,
                 heading_marker: str = HEADING_MARKER):
        self.rules = tuple(rules)
        self.headings = tuple(headings)
        self.stop_marker = stop_marker
        self.heading_marker = heading_marker

    def clean_lines(self, lines: Sequence[str]) -> List[str]:
        truncated = truncate_at_stop_marker(lines, self.stop_marker)
        filtered = filter_artifacts(truncated, self.rules)
        collapsed = collapse_blank_lines(filtered)
        return promote_headings(collapsed, self.headings, self.heading_marker)

    def clean_text(self, raw: str) -> str:
        return "\n".join(self.clean_lines(split_lines(raw)))


_default_cleaner = TextCleaner()


def clean_lines(lines: Sequence[str]) -> List[str]:
    """Run truncation, artifact filtering, blank collapsing and heading promotion."""
    return _default_cleaner.clean_lines(lines)


def clean_text(raw: str) -> str:
    """Clean raw pdftotext output into a section-annotated document.

    Pure and total: any string, including the empty one, gives a result.
    """
    return _default_cleaner.clean_text(raw)
