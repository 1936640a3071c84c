"""clex renderers.

Renderers turn annotated text into display formats.

Available Renderers:
- HtmlRenderer: wraps each token in ``<span class="...">``

Thread Safety:
All renderers keep per-call state local to render().

"""

from clex.renderers.html import HtmlRenderer
from clex.renderers.protocol import MarkupRenderer

__all__ = ["HtmlRenderer", "MarkupRenderer"]
