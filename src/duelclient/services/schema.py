from __future__ import annotations

import json
from pathlib import Path

from jsonschema import Draft202012Validator

from duelclient.core.serialize import SnapshotError, snapshot_from_dict
from duelclient.core.types import GameSnapshot

SNAPSHOT_SCHEMA = "game_snapshot.schema.json"


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SnapshotError(f"Missing schema file: {path}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, validator: Draft202012Validator, *, context: str) -> None:
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise SnapshotError("\n".join(lines))


class SnapshotSchema:
    """Validates decoded server payloads before they become snapshots."""

    def __init__(self, schema_dir: Path) -> None:
        schema = _load_json(schema_dir / SNAPSHOT_SCHEMA)
        Draft202012Validator.check_schema(schema)
        self._validator = Draft202012Validator(schema)

    def validate(self, raw: object, *, context: str = "snapshot") -> None:
        validate_json(raw, self._validator, context=context)

    def parse(self, raw: object, *, context: str = "snapshot") -> GameSnapshot:
        self.validate(raw, context=context)
        return snapshot_from_dict(raw)
