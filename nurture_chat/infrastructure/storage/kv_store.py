import os
import threading
from pathlib import Path
from typing import Dict, Optional
from uuid import uuid4

from nurture_chat.config.settings import settings
from nurture_chat.domain.exceptions import StoreReadError, StoreWriteError


class FileKeyValueStore:
    """每个键对应 root 下的一个文件，写入先落临时文件再原子替换。"""

    def __init__(self, root: str | Path | None = None):
        self._root = Path(root or settings.storage_root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreReadError(code="STORE_READ_ERROR", message=str(e), key=key)

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = self._root / f"{path.name}.{uuid4().hex}.tmp"
        try:
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StoreWriteError(code="STORE_WRITE_ERROR", message=str(e), key=key)

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"invalid storage key: {key!r}")
        return self._root / f"{key}.json"


class InMemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
