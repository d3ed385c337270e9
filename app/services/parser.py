import re
from typing import List, Optional

# "* kyou  今日 【きょう】"
HEADER_RE = re.compile(r"^\*\s+(\S+)\s+(.*?)(?:\s+【(.*?)】)?$")
GLOSS_START_RE = re.compile(r"^[0-9]+\.")
# "1. [n] 《info》 definition"
GLOSS_RE = re.compile(r"^[0-9]+\.\s+(?:\[(.*?)\]\s+)?(?:《(.*?)》\s+)?(.*)")


def parse_header(line: str) -> Optional[dict]:
    m = HEADER_RE.match(line)
    if not m:
        return None
    word, text, kana = m.group(1), m.group(2), m.group(3)
    return {
        "word": word,
        "text": text.strip() if text else word,
        "kana": kana or "",
        "glosses": [],
    }


def parse_gloss(line: str) -> Optional[dict]:
    m = GLOSS_RE.match(line)
    if not m:
        return None
    return {
        "pos": m.group(1) or "",
        "info": m.group(2) or "",
        "definition": m.group(3) or "",
    }


def parse_ichiran_output(output: str) -> dict:
    """
    Parse `ichiran-cli -i` output into {"romanized": ..., "words": [...]}.

    The first line is the romanized sentence. Each `* ` line opens a word,
    numbered lines under it are glosses. A header that does not parse opens
    nothing, so glosses after it are dropped until the next good header.
    """
    lines = (output or "").strip().split("\n")
    if not lines:
        return {"romanized": "", "words": []}

    romanized = lines[0]
    words: List[dict] = []
    current: Optional[dict] = None

    for raw in lines[1:]:
        line = raw.strip()
        if line.startswith("* "):
            if current is not None:
                words.append(current)
            current = parse_header(line)
        elif line and current is not None and GLOSS_START_RE.match(line):
            gloss = parse_gloss(line)
            if gloss is not None:
                current["glosses"].append(gloss)

    if current is not None:
        words.append(current)

    return {"romanized": romanized, "words": words}
