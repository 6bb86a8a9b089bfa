"""Shared pipeline for replace-wholesale JSON document imports.

Each importer owns a set of tables that mirror one JSON document in the
storage bucket. An import downloads and parses the document, validates
every record, and only then swaps the table contents in one transaction:
a bad download or a bad document never touches the existing rows.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from ..clients.storage_client import DocumentStoreClient, DocumentStoreError
from ..exceptions import (
    ConfigurationMissingError,
    ExternalUnavailableError,
    MalformedDocumentError,
    ValidationFailureError,
)

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    name: str
    rows_written: int = 0
    skipped: int = 0
    counts: Dict[str, int] = field(default_factory=dict)

    def add(self, table: str, n: int = 1) -> None:
        self.counts[table] = self.counts.get(table, 0) + n
        self.rows_written += n

    def as_dict(self) -> dict:
        return asdict(self)


def missing_fields(record: Any, required: Sequence[str]) -> List[str]:
    """Required keys that are absent, null or empty in *record*."""
    if not isinstance(record, dict):
        return list(required)
    return [f for f in required if record.get(f) in (None, "")]


PLAIN_TYPES = (str, int, float, bool)


def non_scalar_fields(record: Any, fields: Sequence[str]) -> List[str]:
    """Keys of *fields* present in *record* whose value is not text, a number or a boolean."""
    if not isinstance(record, dict):
        return []
    return [
        f for f in fields
        if record.get(f) is not None and not isinstance(record[f], PLAIN_TYPES)
    ]


class DocumentImporter:
    """Base class for the testimonial, package and FAQ importers.

    Subclasses set ``name`` and implement:
        extract_records(payload)   -- top-level shape check, returns records
        validate_record(record)    -- list of missing field names
        invalid_fields(record)     -- list of wrongly typed field names (optional)
        replace_rows(records, result, payload)  -- delete owned rows, insert new ones

    ``strict`` decides what an invalid record does: abort the import with
    ValidationFailureError, or get dropped with a warning.
    """

    name = "document"

    def __init__(
        self,
        db: Session,
        storage: DocumentStoreClient,
        bucket: str,
        document: str,
        strict: bool = False,
    ):
        self.db = db
        self.storage = storage
        self.bucket = bucket
        self.document = document
        self.strict = strict

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def import_document(self) -> ImportResult:
        """Run the full download -> validate -> replace pipeline.

        Raises:
            ConfigurationMissingError: no storage bucket configured.
            ExternalUnavailableError: the document could not be downloaded.
            MalformedDocumentError: not JSON, or the wrong top-level shape.
            ValidationFailureError: strict importer found an invalid record.
        """
        if not self.bucket:
            raise ConfigurationMissingError("SUPABASE_STORAGE_BUCKET")

        raw = self._download()
        payload = self._parse(raw)
        records = self.extract_records(payload)
        valid, skipped = self._validate(records)

        result = ImportResult(name=self.name, skipped=skipped)
        try:
            self.replace_rows(valid, result, payload)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Import rolled back", extra={"importer": self.name})
            raise

        logger.info(
            "Imported %s", self.document,
            extra={"importer": self.name, "rows_written": result.rows_written, "skipped": result.skipped},
        )
        return result

    def _download(self) -> bytes:
        try:
            return self.storage.download(self.bucket, self.document)
        except DocumentStoreError as exc:
            raise ExternalUnavailableError(
                "supabase-storage",
                f"Could not download {self.bucket}/{self.document}: {exc}",
                exc,
            ) from exc

    def _parse(self, raw: bytes) -> Any:
        try:
            return json.loads(raw)
        except (ValueError, TypeError) as exc:
            raise MalformedDocumentError(self.document, f"invalid JSON: {exc}") from exc

    def _validate(self, records: List[Any]) -> Tuple[List[Any], int]:
        valid: List[Any] = []
        skipped = 0
        for index, record in enumerate(records):
            missing = self.validate_record(record)
            invalid = self.invalid_fields(record)
            if not missing and not invalid:
                valid.append(record)
                continue
            if self.strict:
                raise ValidationFailureError(self.document, index, missing, invalid)
            skipped += 1
            logger.warning(
                "Skipping invalid record",
                extra={
                    "importer": self.name,
                    "index": index,
                    "missing_fields": missing,
                    "invalid_fields": invalid,
                },
            )
        return valid, skipped

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def extract_records(self, payload: Any) -> List[Any]:
        raise NotImplementedError

    def validate_record(self, record: Any) -> List[str]:
        raise NotImplementedError

    def invalid_fields(self, record: Any) -> List[str]:
        return []

    def replace_rows(self, records: List[Any], result: ImportResult, payload: Any) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    def require_list(self, payload: Any, key: Optional[str] = None, optional: bool = False) -> List[Any]:
        """Return payload (or payload[key]) as a list, or raise MalformedDocumentError."""
        if key is None:
            value = payload
            where = "top level"
        else:
            if not isinstance(payload, dict):
                raise MalformedDocumentError(self.document, "expected a JSON object at top level")
            value = payload.get(key)
            where = f"'{key}'"
            if value is None and optional:
                return []
        if not isinstance(value, list):
            raise MalformedDocumentError(self.document, f"expected an array at {where}")
        return value
