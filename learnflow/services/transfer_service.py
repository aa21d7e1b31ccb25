"""
Import/export service for card collections.

Supported formats: CSV, TSV, Quizlet (tab separated, no header) and the
application's own JSON. JSON exports keep the Leitner state; every other
format carries content only.
"""
import csv
import io
import json
import logging
from typing import Any, List, Sequence, Union

from pydantic import TypeAdapter

from learnflow.core.exceptions import ValidationError
from learnflow.schemas.card import Card, CardDraft, DEFAULT_UNIT
from learnflow.schemas.transfer import CardFormat, ExportFile

logger = logging.getLogger(__name__)

EXPORT_HEADER = ["Front", "Back", "Translation", "Example"]

_cards_adapter = TypeAdapter(List[Card])


def _coerce_format(format: Union[str, CardFormat]) -> CardFormat:
    try:
        return CardFormat(format)
    except ValueError as exc:
        raise ValidationError(
            f"Unsupported format: {format}. Must be one of: csv, tsv, quizlet, json"
        ) from exc


def _draft_from_fields(fields: Sequence[Any]) -> Union[CardDraft, None]:
    """Build a draft from positional fields (front, back, translation, example)."""
    values = [str(f).strip() if f is not None else "" for f in fields]
    values += [""] * (4 - len(values))
    front, back, translation, example = values[:4]
    if not front or not back:
        return None
    return CardDraft(front=front, back=back, translation=translation, example=example, unit=DEFAULT_UNIT)


def _parse_csv(text: str) -> List[CardDraft]:
    lines = text.strip().split("\n")
    first = lines[0].lower()
    has_header = "front" in first or "term" in first
    data_lines = [line.rstrip("\r") for line in (lines[1:] if has_header else lines) if line.strip()]

    drafts = []
    for fields in csv.reader(data_lines, skipinitialspace=True):
        if len(fields) < 2:
            continue
        draft = _draft_from_fields(fields)
        if draft:
            drafts.append(draft)
    return drafts


def _parse_tabbed(text: str, allow_header: bool) -> List[CardDraft]:
    lines = text.strip().split("\n")
    has_header = allow_header and "front" in lines[0].lower()
    data_lines = lines[1:] if has_header else lines

    drafts = []
    for line in data_lines:
        if not line.strip():
            continue
        fields = line.rstrip("\r").split("\t")
        if len(fields) < 2:
            continue
        draft = _draft_from_fields(fields)
        if draft:
            drafts.append(draft)
    return drafts


def _parse_json(text: str) -> List[CardDraft]:
    try:
        parsed = json.loads(text)
    except ValueError as exc:
        raise ValidationError(f"Import failed: invalid JSON ({exc})") from exc
    if not isinstance(parsed, list):
        raise ValidationError("Import failed: JSON input must be a list of cards")

    drafts = []
    for item in parsed:
        if not isinstance(item, dict):
            continue
        draft = _draft_from_fields([
            item.get("front") or "",
            item.get("back") or "",
            item.get("translation") or "",
            item.get("example") or "",
        ])
        if draft:
            drafts.append(draft)
    return drafts


def parse_import(text: str, format: Union[str, CardFormat]) -> List[CardDraft]:
    """
    Parse pasted text into card drafts.

    Args:
        text: Raw import text
        format: One of 'csv', 'tsv', 'quizlet', 'json'

    Returns:
        Card drafts with unit 'General'

    Raises:
        ValidationError: If the input is empty, undecodable, or yields no cards
    """
    card_format = _coerce_format(format)
    if not text or not text.strip():
        raise ValidationError("Nothing to import: paste your data first")

    if card_format == CardFormat.JSON:
        drafts = _parse_json(text)
    elif card_format == CardFormat.CSV:
        drafts = _parse_csv(text)
    else:
        drafts = _parse_tabbed(text, allow_header=card_format == CardFormat.TSV)

    if not drafts:
        raise ValidationError("No valid cards found in the input")

    logger.info(f"Parsed {len(drafts)} card(s) from {card_format.value} input")
    return drafts


def export_cards(cards: Sequence[Card], format: Union[str, CardFormat]) -> ExportFile:
    """
    Serialize cards for download.

    Args:
        cards: Card collection
        format: One of 'csv', 'tsv', 'quizlet', 'json'

    Returns:
        ExportFile with filename, media type and content

    Raises:
        ValidationError: If there are no cards or the format is unknown
    """
    card_format = _coerce_format(format)
    if not cards:
        raise ValidationError("No cards to export")

    if card_format == CardFormat.JSON:
        content = json.dumps(_cards_adapter.dump_python(list(cards), mode="json"), indent=2, ensure_ascii=False)
        return ExportFile(filename="learnflow-cards.json", media_type="application/json", content=content)

    if card_format == CardFormat.CSV:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        buffer.write(",".join(EXPORT_HEADER) + "\n")
        for card in cards:
            writer.writerow([card.front, card.back, card.translation or "", card.example or ""])
        return ExportFile(filename="learnflow-cards.csv", media_type="text/csv", content=buffer.getvalue())

    if card_format == CardFormat.TSV:
        lines = ["\t".join(EXPORT_HEADER)]
        lines += [
            f"{card.front}\t{card.back}\t{card.translation or ''}\t{card.example or ''}"
            for card in cards
        ]
        return ExportFile(
            filename="learnflow-cards.tsv",
            media_type="text/tab-separated-values",
            content="\n".join(lines) + "\n",
        )

    content = "".join(f"{card.front}\t{card.back}\n" for card in cards)
    return ExportFile(filename="learnflow-cards-quizlet.txt", media_type="text/plain", content=content)
