"""
Local fallback storage for submissions that could not reach the server.

A JSON file standing in for the browser's persistent storage: one fixed key
per submission kind, each holding an ordered list of records. Records the
server refused during replay move to a separate rejected key.
"""

import os
import json
import time
import logging
from datetime import datetime, timezone
from utils.validation import required_fields


logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    'contact': 'contact_messages',
    'testimonial': 'testimonials',
}

REJECTED_KEYS = {
    'contact': 'rejected_contact_messages',
    'testimonial': 'rejected_testimonials',
}


class LocalFallbackStore:

    def __init__(self, path, clock=time.time):
        self.path = path
        self.clock = clock

    def _load(self, for_write=False):
        """
        Read the storage file.

        A missing file reads as empty. An unreadable one also reads as empty,
        but before a write it is renamed aside so its contents are kept.
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except ValueError as e:
            logger.warning("Local storage %s is not valid JSON: %s", self.path, e)
            data = None

        if isinstance(data, dict):
            return data
        if for_write:
            self._set_aside()
        return {}

    def _set_aside(self):
        backup = f"{self.path}.corrupt-{int(self.clock() * 1000)}"
        os.replace(self.path, backup)
        logger.error("Moved unreadable local storage to %s", backup)

    def _save(self, data):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    @staticmethod
    def _key(kind, keys=STORAGE_KEYS):
        try:
            return keys[kind]
        except KeyError:
            raise ValueError(f"Unknown submission kind: {kind}") from None

    @staticmethod
    def _records(data, key):
        records = data.get(key)
        return records if isinstance(records, list) else []

    def entries(self, kind):
        records = self._records(self._load(), self._key(kind))
        return [r for r in records if isinstance(r, dict)]

    def rejected(self, kind):
        records = self._records(self._load(), self._key(kind, REJECTED_KEYS))
        return [r for r in records if isinstance(r, dict)]

    def append(self, kind, fields):
        """
        Append one local-only record and return it.

        Existing records are left untouched; ids are millisecond timestamps,
        bumped when needed so they keep increasing.
        """
        key = self._key(kind)
        data = self._load(for_write=True)
        records = self._records(data, key)

        now = self.clock()
        record_id = int(now * 1000)
        last_ids = [r.get('id') for r in records if isinstance(r, dict) and isinstance(r.get('id'), int)]
        if last_ids and record_id <= max(last_ids):
            record_id = max(last_ids) + 1

        record = {'id': record_id}
        for field in required_fields(kind):
            record[field] = fields.get(field, '')
        record['date_created'] = datetime.fromtimestamp(now, tz=timezone.utc).isoformat()
        # Local records are visible only in this profile, so they count as approved
        record['is_approved'] = True

        records.append(record)
        data[key] = records
        self._save(data)
        logger.info("Saved %s locally with id %s", kind, record_id)
        return record

    def remove(self, kind, ids):
        """Drop records by id; used once the server has confirmed them"""
        ids = set(ids)
        if not ids:
            return 0
        key = self._key(kind)
        data = self._load(for_write=True)
        records = self._records(data, key)
        kept = [r for r in records if not (isinstance(r, dict) and r.get('id') in ids)]
        data[key] = kept
        self._save(data)
        return len(records) - len(kept)

    def reject(self, kind, ids, reasons=None):
        """Move records the server refused to the rejected key, with the reason"""
        ids = set(ids)
        if not ids:
            return 0
        key = self._key(kind)
        rejected_key = self._key(kind, REJECTED_KEYS)
        reasons = reasons or {}
        data = self._load(for_write=True)

        kept, moved = [], []
        for record in self._records(data, key):
            if isinstance(record, dict) and record.get('id') in ids:
                moved.append(dict(record, rejected_reason=reasons.get(record.get('id'))))
            else:
                kept.append(record)

        data[key] = kept
        data[rejected_key] = self._records(data, rejected_key) + moved
        self._save(data)
        return len(moved)
