"""Helpers for rendering values in terminal tables."""


def truncate_text(text: str, max_length: int) -> str:
    """Shorten text to max_length, ending with an ellipsis when cut."""
    if len(text) <= max_length:
        return text
    if max_length <= 3:
        return text[:max_length]
    return text[: max_length - 3] + "..."


def truncate_url(url: str, max_length: int = 60) -> str:
    """Shorten a URL, keeping its start and end visible.

    Example:
        >>> truncate_url("https://example.com/a/very/long/path/feed.xml", 30)
        'https://exampl...path/feed.xml'
    """
    if len(url) <= max_length:
        return url
    if max_length <= 3:
        return url[:max_length]
    keep = max_length - 3
    head = keep - keep // 2
    tail = keep // 2
    return url[:head] + "..." + url[len(url) - tail :]
