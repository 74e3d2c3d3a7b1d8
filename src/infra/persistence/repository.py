"""
MockView - Answer Repository.

JSON-based persistence of answer records.
Each interview session is stored as one JSON file holding every
answer given in it, appended to after every answer.

Usage:
    repo = AnswerRepository()

    # Save after each answer
    repo.save(record)

    # Review one interview or a user's full history
    records = repo.list_session(session_id)
    history = repo.list_user(user_id)

    # Clean up old sessions
    repo.delete(session_id)
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from src.core.config import get_settings
from src.core.domain.models import AnswerRecord
from src.core.exceptions import StorageError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class AnswerRepository:
    """
    JSON-based answer persistence.

    Stores answer records as JSON files in a data directory,
    one file per interview session.
    """

    def __init__(self, data_dir: Optional[str] = None):
        """
        Initialize repository with data directory.

        Args:
            data_dir: Directory to store session JSON files
                (defaults to the ANSWER_STORE_DIR setting)
        """
        self._data_dir = Path(data_dir or get_settings().ANSWER_STORE_DIR)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Answer repository initialized at: {self._data_dir}")

    def _session_path(self, session_id: str) -> Path:
        """Get file path for a session ID."""
        # Sanitize session_id to prevent path traversal
        safe_id = "".join(c for c in session_id if c.isalnum() or c in "-_")
        return self._data_dir / f"{safe_id}.json"

    def save(self, record: AnswerRecord) -> None:
        """
        Append an answer record to its session file.

        Uses atomic write pattern to prevent corruption.

        Raises:
            StorageError: If the existing session file cannot be read,
                or the file cannot be written
        """
        path = self._session_path(record.session_id)

        # An unreadable file must not be mistaken for an empty session
        try:
            records = self._read_records(path) if path.exists() else []
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Refusing to overwrite unreadable session {record.session_id}: {e}")
            raise StorageError(record.session_id, f"existing file is unreadable: {e}") from e

        records.append(record)

        data = {
            "version": SCHEMA_VERSION,
            "session_id": record.session_id,
            "records": [r.to_dict() for r in records],
        }
        temp_path = path.with_suffix(".json.tmp")

        try:
            # Write to temp file first (atomic write pattern)
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=str)

            # Rename temp to final (atomic on most filesystems)
            temp_path.replace(path)

            logger.debug(f"Saved answer for session {record.session_id} ({len(records)} answers)")

        except OSError as e:
            logger.error(f"Failed to save session {record.session_id}: {e}")
            # Clean up temp file if it exists
            if temp_path.exists():
                temp_path.unlink()
            raise StorageError(record.session_id, str(e)) from e

    def list_session(self, session_id: str) -> list[AnswerRecord]:
        """
        Load every answer record for one session, oldest first.

        Returns an empty list when the session is unknown or unreadable.
        """
        path = self._session_path(session_id)

        if not path.exists():
            return []

        try:
            return self._read_records(path)

        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Failed to load session {session_id}: {e}")
            return []

    def _read_records(self, path: Path) -> list[AnswerRecord]:
        """Load a session file, raising on any read or decode failure."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return [self._dict_to_record(r) for r in data.get("records", [])]

    def list_user(self, user_id: str, role: Optional[str] = None) -> list[AnswerRecord]:
        """
        Load every answer record for a user, newest first.

        Args:
            user_id: Owner of the records
            role: Only include records for this role
        """
        records = [
            record
            for session_id in self.list_sessions()
            for record in self.list_session(session_id)
            if record.user_id == user_id and (role is None or record.role == role)
        ]
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records

    def list_sessions(self) -> list[str]:
        """
        List all stored session IDs.

        Returns:
            List of session IDs (without .json extension)
        """
        return [p.stem for p in self._data_dir.glob("*.json")]

    def delete(self, session_id: str) -> bool:
        """
        Delete session file.

        Returns:
            True if deleted, False if not found
        """
        path = self._session_path(session_id)
        if path.exists():
            path.unlink()
            logger.info(f"Deleted session file: {session_id}")
            return True
        return False

    def cleanup_old_sessions(self, max_age_hours: int = 24 * 30) -> int:
        """
        Delete session files older than max_age_hours.

        Returns:
            Number of sessions cleaned up
        """
        count = 0
        cutoff = datetime.now().timestamp() - (max_age_hours * 3600)

        for path in self._data_dir.glob("*.json"):
            if path.stat().st_mtime < cutoff:
                path.unlink()
                count += 1
                logger.info(f"Cleaned up old session file: {path.stem}")

        return count

    # -------------------------------------------------------------------------
    # Serialization Helpers
    # -------------------------------------------------------------------------

    def _dict_to_record(self, data: dict) -> AnswerRecord:
        """Reconstruct an answer record from dict."""
        return AnswerRecord(
            role=data["role"],
            question=data["question"],
            answer=data.get("answer", ""),
            feedback=data.get("feedback", ""),
            score=int(data.get("score", 0)),
            session_id=data["session_id"],
            user_id=data.get("user_id", ""),
            category=data.get("category", ""),
            difficulty=data.get("difficulty", ""),
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else datetime.now(),
        )
