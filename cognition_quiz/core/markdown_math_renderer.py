"""Markdown + LaTeX rendering of question text for web clients.

Question stems and explanations may mix markdown, inline HTML and ``$...$``
math. The renderer only produces HTML; math is typeset by MathJax in the
client, so dollar-delimited spans pass through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments."""

    enable_html: bool = True
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into a block-level HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a short string (a choice label) without a wrapping paragraph."""

        return self._markdown.renderInline(markdown_text.strip())


renderer = MarkdownMathRenderer()
# Shared instance; MarkdownIt is safe for concurrent read-only renders.
