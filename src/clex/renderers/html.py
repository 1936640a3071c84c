"""HTML renderer for annotated source text.

Replaces each BEGIN marker with ``<span class="...">`` and each END marker
with ``</span>``, escaping the text in between. It depends on nothing but
the marker-to-category association, so any annotated text works,
including text produced by another process.

Thread Safety:
All per-render state is local to the render() call. Multiple threads can
share one HtmlRenderer instance.

"""

import html
from collections.abc import Mapping

from clex.markers import MARKER_PATTERN
from clex.tokens import Category, Role


def html_escape(s: str) -> str:
    """Escape HTML special characters in source text.

    Escapes <, >, & and " but leaves single quotes alone, so character
    constants stay readable in the output.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


class HtmlRenderer:
    """Render annotated text as HTML.

    Usage:
        >>> from clex import lex
        >>> HtmlRenderer().render(lex("int"))
        '<span class="KEYWORDS">int</span>'

    Args:
        class_names: Override the CSS class for some or all categories
        escape: Escape HTML special characters in the source text
        tag: Element name used to wrap each token

    """

    __slots__ = ("_open_tags", "_close_tag", "_escape")

    def __init__(
        self,
        class_names: Mapping[Category, str] | None = None,
        *,
        escape: bool = True,
        tag: str = "span",
    ) -> None:
        names = {category: category.css_class for category in Category}
        if class_names:
            names.update(class_names)
        self._open_tags: dict[Category, str] = {
            category: f'<{tag} class="{html_escape(name)}">'
            for category, name in names.items()
        }
        self._close_tag = f"</{tag}>"
        self._escape = escape

    def render(self, annotated: str) -> str:
        """Substitute markers in annotated text with HTML tags.

        Args:
            annotated: Text produced by :func:`clex.lex`

        Returns:
            HTML fragment; unmarked text is copied through (escaped)
        """
        parts: list[str] = []
        pos = 0
        for match in MARKER_PATTERN.finditer(annotated):
            if match.start() > pos:
                parts.append(self._text(annotated[pos : match.start()]))
            decoded = Category.from_marker(match.group())
            if decoded is not None:
                category, role = decoded
                parts.append(
                    self._open_tags[category] if role is Role.BEGIN else self._close_tag
                )
            pos = match.end()
        if pos < len(annotated):
            parts.append(self._text(annotated[pos:]))
        return "".join(parts)

    def _text(self, text: str) -> str:
        return html_escape(text) if self._escape else text
