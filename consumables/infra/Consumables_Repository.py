"""Consumables repository helpers (JSON file persistence).

The database file is a flat JSON array of item objects. Ids are written out
but ignored when reading; the catalogue assigns fresh ones after every load.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Union

from pydantic import ValidationError

from consumables.domain.Consumable import Consumable, ConsumableType
from consumables.domain.exceptions import ParseError, ReadError, WriteError
from consumables.utilities.backup import BackupManager
from consumables.utilities.validators import ConsumableInput

logger = logging.getLogger(__name__)


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'item'}: {err['msg']}"
        for err in error.errors()
    )


def consumable_from_dict(data) -> Consumable:
    """Build an unsaved Consumable (id 0) from one decoded JSON object."""
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")
    try:
        record = ConsumableInput.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Invalid consumable: {_describe(e)}") from e
    item_type = ConsumableType.DRINK if record.is_drink else ConsumableType.FOOD
    return Consumable.build(item_type, 0, record.name, record.notes,
                            record.price, record.expiryDate, record.measure)


def parse_consumable(text: Union[str, bytes]) -> Consumable:
    """Decode a single item from JSON text."""
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ParseError(f"Malformed JSON: {e}") from e
    return consumable_from_dict(data)


def load_consumables(path: Union[str, Path]) -> List[Consumable]:
    """Read all items from the database file.

    A missing file, an empty file or a JSON ``null`` root all yield an empty list.
    """
    path = Path(path)
    if not path.exists():
        logger.info("Database file %s not found, starting with an empty catalogue", path)
        return []
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return []
    except OSError as e:
        raise ReadError(f"Cannot read database file {path}: {e}") from e

    if not raw.strip():
        return []
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ParseError(f"Malformed JSON in {path}: {e}") from e
    if data is None:
        return []
    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array in {path}, got {type(data).__name__}")

    items = []
    for index, entry in enumerate(data):
        try:
            items.append(consumable_from_dict(entry))
        except ParseError as e:
            raise ParseError(f"Entry {index} in {path}: {e}") from e
    logger.debug("Loaded %d consumables from %s", len(items), path)
    return items


def save_consumables(path: Union[str, Path], items: Iterable[Consumable],
                     backup: Optional[BackupManager] = None) -> None:
    """Write all items to the database file, replacing it in one rename."""
    path = Path(path)
    payload = [item.to_dict() for item in items]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if backup is not None:
            backup.create_backup(path)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=path.suffix)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(payload, tmp, indent=2, ensure_ascii=False, allow_nan=False)
            os.replace(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
    except (OSError, ValueError) as e:
        raise WriteError(f"Cannot write database file {path}: {e}") from e
    logger.debug("Saved %d consumables to %s", len(payload), path)
