"""Text normalization applied to model output and the final response.

Line-break convention for bilingual responses: exactly one ``\\n`` separates
the source-language line from the translated line, and the source line keeps
a single trailing space before the break::

    English: <answer> \\n<DisplayName>: <translation>

Models and translation services sometimes emit the two-character escape
``\\\\n`` instead of a real line break; those are expanded before the
response leaves the pipeline.
"""

from __future__ import annotations

ESCAPED_NEWLINE = "\\n"
LINE_BREAK = "\n"


def strip_leading_artifact(text: str) -> str:
    """Drop the whitespace/newline run completion models prepend to their output.

    Only the leading run is touched; inner whitespace and the trailing end
    are returned unchanged.
    """
    return text.lstrip()


def expand_escaped_newlines(text: str) -> str:
    return text.replace(ESCAPED_NEWLINE, LINE_BREAK)


def compose_bilingual(
    answer: str,
    translation: str,
    target_label: str,
    source_label: str = "English",
) -> str:
    lines = [
        f"{source_label}: {answer} ",
        f"{target_label}: {translation}",
    ]
    return expand_escaped_newlines(LINE_BREAK.join(lines))
