"""Self-link extraction for locally supplied feed documents."""

from feedstore.feeds.models import ATOM_NS, Channel
from feedstore.utils.errors import MissingLinkError

ATOM_LINK = f"{{{ATOM_NS}}}link"


def find_self_link(channel: Channel) -> str:
    """Return the href of the channel's ``atom:link rel="self"``.

    In RSS a link with no ``rel`` attribute also counts as a self-link; in a
    native Atom document a missing ``rel`` means "alternate" (RFC 4287). The
    first match in document order wins.

    Raises:
        MissingLinkError: If the channel has no Atom extension elements, no
            atom:link, or the matching link has no href
    """
    extensions = channel.extensions(ATOM_NS)
    if not extensions:
        raise MissingLinkError("Could not find feed link in file: no Atom elements")

    links = [node for node in extensions if node.tag == ATOM_LINK]
    if not links:
        raise MissingLinkError("Could not find feed link in file: no atom:link element")

    default_rel = "self" if channel.kind == "rss" else "alternate"
    for node in links:
        if node.get("rel", default_rel) != "self":
            continue
        href = (node.get("href") or "").strip()
        if not href:
            raise MissingLinkError("Could not find feed link in file: atom:link has no href")
        return href

    raise MissingLinkError("Could not find feed link in file: no atom:link with rel=\"self\"")
