import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Any

from nurture_chat.config.settings import settings

REDACTED = "***"


def _scrub(value: Any) -> Any:
    """把日志里意外出现的 API 密钥替换掉，密钥不得落盘。"""

    key = settings.openai_api_key
    if key and isinstance(value, str) and key in value:
        return value.replace(key, REDACTED)
    return value


class ChatLogFormatter(logging.Formatter):
    """每条日志一行 JSON，默认带上存储键与逻辑模型名，便于按会话排查。"""

    def format(self, record: logging.LogRecord) -> str:
        msg = _scrub(record.getMessage())
        if settings.log_redact_content:
            msg = (msg or "")[:64]
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
            "storage_key": settings.storage_key,
            "model": settings.default_model,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update({k: _scrub(v) for k, v in extra.items()})
        return json.dumps(payload, ensure_ascii=False)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("nurture_chat")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / "chat.log", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(ChatLogFormatter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()
