"""
Central wiring: register all export format handlers.

To add a new export format, add one ``register()`` call below.
This module is imported (as a side-effect) by ``document_io``
to ensure handlers are available before first use.
"""
from functools import partial

from infrastructure.registry import register, ExportFormat, ExportFormatHandler

from formats import html_document


HTML_MEDIA_TYPE = "text/html"


# ---- Plain HTML ----
register(ExportFormat.HTML, ExportFormatHandler(
    extension=html_document.HTML_EXTENSION,
    media_type=HTML_MEDIA_TYPE,
    render=partial(html_document.to_document, word=False),
    parse=html_document.from_document,
))

# ---- Word-processor HTML ----
register(ExportFormat.WORD, ExportFormatHandler(
    extension=html_document.WORD_EXTENSION,
    media_type=HTML_MEDIA_TYPE,
    render=partial(html_document.to_document, word=True),
    parse=html_document.from_document,
))
