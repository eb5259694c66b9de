"""Full-journal backup and restore as JSON text."""

import json

from pydantic import ValidationError

from tzjournal.db.migrations import UnsupportedSchemaError, migrate
from tzjournal.models import JournalState


class BackupError(ValueError):
    """Raised when a backup file cannot be restored."""


def export_backup(state: JournalState) -> str:
    """Serialize the whole journal for download."""
    return state.to_json(indent=2)


def restore_backup(text: str) -> JournalState:
    """Parse a backup produced by export_backup (or an older app version).

    Raises:
        BackupError: If the text is not a valid journal backup.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise BackupError(f"Invalid backup file: {e}") from e

    if not isinstance(payload, dict):
        raise BackupError("Invalid backup file: expected a JSON object")

    try:
        return JournalState.model_validate(migrate(payload))
    except (ValidationError, UnsupportedSchemaError) as e:
        raise BackupError(f"Invalid backup file: {e}") from e
