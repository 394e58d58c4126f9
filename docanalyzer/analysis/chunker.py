from docanalyzer.analysis.models import Chunk


def split_text(text: str, limit: int) -> list[Chunk]:
    """Split text into chunks of at most `limit` characters.

    Cuts at the last newline within reach (the newline itself is dropped),
    or hard-cuts at `limit` when the window holds no newline. Joining the
    chunks with "\\n" restores the text when every cut was on a newline.
    """
    if limit <= 0:
        raise ValueError(f"Chunk limit must be positive, got {limit}")

    chunks: list[Chunk] = []
    length = len(text)
    cursor = 0
    while cursor < length:
        if cursor + limit >= length:
            chunks.append(Chunk(index=len(chunks), content=text[cursor:]))
            break
        end = cursor + limit
        newline = text.rfind("\n", cursor, end + 1)
        if newline != -1:
            chunks.append(Chunk(index=len(chunks), content=text[cursor:newline]))
            cursor = newline + 1
        else:
            chunks.append(Chunk(index=len(chunks), content=text[cursor:end]))
            cursor = end
    return chunks
