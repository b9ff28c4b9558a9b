"""
Key/value persistence for the client session (the ``localStorage`` of a tab).
"""
import json
import logging
import os


logger = logging.getLogger(__name__)


class LocalStorage:
    """In-memory storage, lost when the process exits."""

    def __init__(self, initial=None):
        self._data = dict(initial or {})

    def get_item(self, key):
        return self._data.get(key)

    def set_item(self, key, value):
        self._data[key] = value

    def remove_item(self, key):
        self._data.pop(key, None)

    def clear(self):
        self._data.clear()

    def __contains__(self, key):
        return key in self._data


class FileLocalStorage(LocalStorage):
    """Storage persisted as a JSON file, rewritten on every change."""

    def __init__(self, path):
        self.path = path
        super().__init__(self._load())

    def _load(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding='utf-8') as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logger.error('Failed to read session file %s: %s', self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as fh:
            json.dump(self._data, fh, indent=2)

    def set_item(self, key, value):
        super().set_item(key, value)
        self._save()

    def remove_item(self, key):
        super().remove_item(key)
        self._save()

    def clear(self):
        super().clear()
        self._save()
