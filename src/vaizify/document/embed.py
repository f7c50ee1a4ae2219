"""Embed blocks and per-provider URL normalisation.

A shared link is rarely what an iframe can load, so each provider gets
its URL rewritten into something embeddable before it is stored as the
payload's ``extractedUrl``:

========== ==========================================================
YouTube    ``watch?v=ID`` / ``youtu.be/ID`` → ``/embed/ID``
Figma      ``/design/`` → ``/file/``, wrapped in Figma's embed host
Gist       inline ``data:text/html`` document loading ``{url}.js``
others     unchanged
========== ==========================================================
"""

from __future__ import annotations

import re

from vaizify.document.ids import new_id
from vaizify.document.nodes import EmbedNode
from vaizify.document.payloads import EmbedPayload, encode_payload
from vaizify.errors import VaizifyBuildError
from vaizify.models import EmbedSize, EmbedType
from vaizify.observability.logger import get_logger, log_fields

logger = get_logger("vaizify.document.embed")

_YOUTUBE_ID_RE = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]+)")

_GIST_DOCUMENT = (
    "data:text/html;charset=utf-8,\n"
    "      <head><base target='_blank'/></head>\n"
    "      <body><script src='{url}.js'></script>\n"
    "      </body>"
)

_SIZES = frozenset(size.value for size in EmbedSize)


def _embed_type(value: EmbedType | str) -> EmbedType:
    try:
        return EmbedType(value)
    except ValueError as exc:
        raise VaizifyBuildError(
            message=f"Unknown embed type {value!r}",
            context={"builder": "embed_block", "value": value},
            cause=exc,
        ) from exc


def extract_embed_url(url: str, embed_type: EmbedType | str) -> str:
    """Return the embeddable form of *url* for *embed_type*.

    YouTube links without a recognisable video id are returned unchanged.
    GitHub Gists have no hosted embed endpoint, so the result is an
    inline HTML document that loads the gist script rather than a URL.
    """
    provider = _embed_type(embed_type)

    if provider is EmbedType.YOUTUBE:
        match = _YOUTUBE_ID_RE.search(url)
        if match:
            return f"https://www.youtube.com/embed/{match.group(1)}"
        logger.debug(
            "No YouTube video id in embed URL; storing it unchanged",
            extra=log_fields(url=url),
        )
        return url

    if provider is EmbedType.FIGMA:
        figma_url = url.replace("/design/", "/file/", 1)
        return f"https://www.figma.com/embed?embed_host=share&url={figma_url}"

    if provider is EmbedType.GITHUB_GIST:
        return _GIST_DOCUMENT.format(url=url)

    return url


def embed_block(
    url: str = "",
    embed_type: EmbedType | str = EmbedType.IFRAME,
    size: EmbedSize | str = EmbedSize.MEDIUM,
    is_content_hidden: bool = False,
) -> EmbedNode:
    """Create an embed block for *url*.

    Parameters
    ----------
    url:
        The link as the user shared it; stored verbatim as ``url``.
    embed_type:
        Provider, which selects the normalisation rule.
    size:
        ``"small"``, ``"medium"`` or ``"large"``.
    is_content_hidden:
        Collapse the embed behind its header.  Written to the node attrs
        as given.  In the payload, Figma embeds are always hidden and Miro
        embeds are hidden only on request; other providers omit the flag.
    """
    provider = _embed_type(embed_type)
    size_value = size.value if isinstance(size, EmbedSize) else size
    if size_value not in _SIZES:
        raise VaizifyBuildError(
            message=f"embed size must be one of small, medium, large; got {size!r}",
            context={"builder": "embed_block", "value": size_value},
        )

    payload = EmbedPayload(
        type=provider.value,
        url=url,
        extracted_url=extract_embed_url(url, provider),
    )
    if provider is EmbedType.FIGMA:
        payload.is_content_hidden = True
    elif provider is EmbedType.MIRO and is_content_hidden:
        payload.is_content_hidden = True

    return {
        "type": "embed",
        "attrs": {
            "uid": new_id(),
            "custom": 1,
            "contenteditable": "false",
            "size": size_value,
            "isContentHidden": is_content_hidden,
        },
        "content": [encode_payload(payload)],
    }
