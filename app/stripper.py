import re

# Leading "---" block; the body may be empty ("---\n---\n")
FRONT_MATTER_RE = re.compile(r"\A---\n(?:[\s\S]*?\n)?---\n")

# Trailing block anchor like "Some text ^abc123"
BLOCK_ID_RE = re.compile(r"\s*\^[A-Za-z0-9]+\s*$")

# Capturing so the separators survive re.split
LINE_SEP_RE = re.compile(r"(\r\n|\n)")

def strip_front_matter(text: str) -> str:
    return FRONT_MATTER_RE.sub("", text, count=1)

def strip_block_ids(text: str) -> str:
    """Drop trailing ^id anchors from every line.

    Only trailing whitespace is trimmed so list and code indentation survive.
    """
    parts = LINE_SEP_RE.split(text)
    # even indices are line bodies, odd indices the separators between them
    for i in range(0, len(parts), 2):
        parts[i] = BLOCK_ID_RE.sub("", parts[i]).rstrip()
    return "".join(parts)

def strip_note(text: str, remove_metadata: bool, remove_block_ids: bool) -> str:
    if remove_metadata:
        text = strip_front_matter(text)
    if remove_block_ids:
        text = strip_block_ids(text)
    return text
