"""
Lecture / écriture des pages markdown avec front matter YAML

Format attendu:

    ---
    title: Forms and validation
    author: Jane Doe
    tags: [phoenix, forms]
    next_page_id: my-first-liveview-project
    ---

    Texte de la page...
"""

import logging
import re
import unicodedata
from typing import Tuple

import yaml
from pydantic import ValidationError

from coursepages.schemas.page import FRONT_MATTER_KEYS, PageMetadata

logger = logging.getLogger(__name__)

FRONT_MATTER_OPEN = "---"
FRONT_MATTER_CLOSE = ("---", "...")

# ligne de fence: au plus 3 espaces, puis 3+ backticks ou tildes, puis un info string optionnel ("elixir")
FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


class FrontMatterError(ValueError):
    """Document markdown dont le front matter est absent ou invalide"""


def split_front_matter(text: str) -> Tuple[str, str]:
    """Sépare le bloc YAML du body. Sans front matter: ("", text)"""
    text = text.lstrip("\ufeff").replace("\r\n", "\n")
    lines = text.split("\n")

    if not lines or lines[0].rstrip() != FRONT_MATTER_OPEN:
        return "", text

    for i in range(1, len(lines)):
        if lines[i].rstrip() in FRONT_MATTER_CLOSE:
            raw = "\n".join(lines[1:i])
            body = "\n".join(lines[i + 1:]).lstrip("\n")
            return raw, body

    raise FrontMatterError("Unterminated front matter block")


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "front matter"
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


def parse_page(text: str) -> Tuple[PageMetadata, str]:
    """Parse un document complet et retourne (metadata, body)"""
    raw, body = split_front_matter(text)
    if not raw.strip():
        raise FrontMatterError("Document has no front matter")

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML in front matter: {e}") from e

    if not isinstance(data, dict):
        raise FrontMatterError("Front matter must be a mapping")

    unknown = [key for key in data if key not in FRONT_MATTER_KEYS]
    if unknown:
        logger.debug("Ignoring unknown front matter keys: %s", unknown)

    try:
        metadata = PageMetadata.model_validate({k: v for k, v in data.items() if k in FRONT_MATTER_KEYS})
    except ValidationError as e:
        raise FrontMatterError(_format_validation_error(e)) from e

    return metadata, body


def render_page(metadata: PageMetadata, body: str) -> str:
    """Inverse de parse_page: front matter (clés dans l'ordre fixe) + body"""
    values = metadata.model_dump()
    data = {}
    for key in FRONT_MATTER_KEYS:
        value = values.get(key)
        if value is None or value == []:
            continue
        data[key] = value

    dumped = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    if body and not body.endswith("\n"):
        body += "\n"
    return f"{FRONT_MATTER_OPEN}\n{dumped}{FRONT_MATTER_OPEN}\n\n{body}"


def _scan_fences(body: str) -> Tuple[int, bool]:
    # un bloc ouvert par ``` ne se ferme que par ``` (au moins aussi long, sans info string)
    count = 0
    opened = None
    for line in body.replace("\r\n", "\n").split("\n"):
        match = FENCE_RE.match(line.rstrip())
        if not match:
            continue
        marker, info = match.group(1), match.group(2).strip()
        if opened is None:
            opened = (marker[0], len(marker))
            count += 1
        elif marker[0] == opened[0] and len(marker) >= opened[1] and not info:
            opened = None
            count += 1
    return count, opened is not None


def count_fences(body: str) -> int:
    """Nombre de délimiteurs de code block (ouvrants + fermants)"""
    count, _ = _scan_fences(body)
    return count


def has_balanced_fences(body: str) -> bool:
    count, unclosed = _scan_fences(body)
    return not unclosed and count % 2 == 0


def slugify(text: str) -> str:
    """'Forms & Validation!' -> 'forms-validation'"""
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode()
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
