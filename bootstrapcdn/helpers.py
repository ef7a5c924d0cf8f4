"""Template helpers, exposed to every page as `helpers`."""

from types import SimpleNamespace
from typing import Iterable

from markupsafe import Markup

from bootstrapcdn.config import VersionRecord


def protocol_relative(url: str) -> str:
    """Strip the scheme so a URL can be pasted into http and https pages."""
    for scheme in ("https:", "http:"):
        if url.startswith(scheme + "//"):
            return url[len(scheme):]
    return url


def stylesheet_tag(url: str | None) -> Markup:
    """<link> for a stylesheet; empty when the record has no URL."""
    if not url:
        return Markup()
    return Markup('<link href="{}" rel="stylesheet">').format(url)


def script_tag(url: str | None) -> Markup:
    if not url:
        return Markup()
    return Markup('<script src="{}"></script>').format(url)


def latest(records: Iterable[VersionRecord]) -> VersionRecord | None:
    """Record flagged `latest: true`, else the first one listed."""
    records = list(records)
    for record in records:
        if record.extra.get("latest"):
            return record
    return records[0] if records else None


def code_block(text: str) -> Markup:
    return Markup("<pre><code>{}</code></pre>").format(str(text))


def as_namespace() -> SimpleNamespace:
    return SimpleNamespace(
        protocol_relative=protocol_relative,
        stylesheet_tag=stylesheet_tag,
        script_tag=script_tag,
        latest=latest,
        code_block=code_block,
    )
