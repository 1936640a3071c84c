"""MarkupRenderer protocol: stable interface for annotated-text renderers.

Any renderer that implements ``render(annotated) -> str`` conforms to this
protocol. The built-in ``HtmlRenderer`` is the reference implementation.

Example:
    from clex.renderers.protocol import MarkupRenderer

    def highlight(renderer: MarkupRenderer, source: str) -> str:
        return renderer.render(lex(source))

"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MarkupRenderer(Protocol):
    """Protocol for renderers of annotated text.

    Contract:
        - MUST copy every non-marker character through, in order
        - MUST NOT raise for unbalanced markers
        - SHOULD be stateless between calls

    """

    def render(self, annotated: str) -> str:
        """Render annotated text to a string."""
        ...
