"""Jinja2 filters for EPUB template rendering.

These filters are used by the OPF, NCX and page templates to build
references between the documents of the package. Each takes a
ManifestItem.
"""


def page_href(item) -> str:
    """Path of a page's markup document relative to the OEBPS directory."""
    return f"pages/{item.base}.xhtml"


def image_href(item) -> str:
    """Path of a page's image relative to the OEBPS directory.

    The OPF manifest and NCX live in OEBPS/, page documents live in
    OEBPS/pages/ and must prefix this with ``../``.
    """
    return f"images/{item.base}.{item.extension}"


def image_id(item) -> str:
    """Manifest id of a page's image, distinct from the page document id."""
    return f"image-{item.base}"


def page_label(item) -> str:
    """Human-readable navigation label, e.g. ``"Page 3"``."""
    return f"Page {item.id}"


# Registry of all filters for easy registration with Jinja2
FILTERS = {
    "page_href": page_href,
    "image_href": image_href,
    "image_id": image_id,
    "page_label": page_label,
}
