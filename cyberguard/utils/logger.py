"""
cyberguard/utils/logger.py → logger aplikasi dengan 2 mode:

file (default): tulis ke logs/YYYY-MM/<module>.log, rotasi harian, retensi (default 90 hari), month-aware, thread-safe.

stdout: hanya ke console (serahkan rotasi/agregasi ke Docker/systemd).

Semua konfigurasi cukup di .env di root proyek (prefix LOG_), atau di Quart app.config.
"""

# cyberguard/utils/logger.py
from __future__ import annotations

import logging
import os
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Callable

from logging.handlers import TimedRotatingFileHandler

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from quart import current_app, has_app_context


# ==========
# ENV loader
# ==========
def _detect_project_root() -> Path:
    """
    Cari akar proyek:
    - ENV PROJECT_ROOT
    - folder yang punya pyproject.toml atau .git
    - fallback: 2 level di atas file ini
    """
    env_root = os.getenv("PROJECT_ROOT")
    if env_root:
        return Path(env_root).resolve()

    here = Path(__file__).resolve()
    for p in here.parents:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return here.parents[2]


_env_loaded = False


def _load_env_once() -> None:
    """Muat .env dari akar proyek sekali saja, tanpa menimpa ENV yang sudah ada."""
    global _env_loaded
    if _env_loaded:
        return
    load_dotenv(_detect_project_root() / ".env", override=False)
    _env_loaded = True


# ==========
# Settings
# ==========
class CyberguardLogSettings(BaseSettings):
    """
    Konfigurasi via ENV (prefix LOG_) / .env / overlay dari Quart app.config

      - LOG_MODE=file|stdout
      - LOG_LEVEL=INFO|DEBUG|WARNING|ERROR
      - LOG_FORMAT="%(asctime)s %(levelname)s %(name)s: %(message)s"
      - LOG_DATEFMT="%Y-%m-%d %H:%M:%S"
      - LOG_RETENTION=90
      - LOG_ROOT_DIR="/path/proyek" (opsional; default autodetect)
      - LOG_CONSOLE=true|false
      - LOG_CONSOLE_LEVEL=INFO|DEBUG|... (opsional; default ikut LOG_LEVEL)
      - LOG_MONTH_FORMAT="%Y-%m"
      - LOG_USE_UTC=false|true
    """

    model_config = SettingsConfigDict(env_prefix="LOG_", extra="ignore")

    mode: str = "file"
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
    retention: int = 90
    root_dir: Optional[Path] = None
    console: bool = True
    console_level: Optional[str] = None
    month_format: str = "%Y-%m"
    use_utc: bool = False


_OVERLAY_KEYS = (
    "LOG_MODE",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_DATEFMT",
    "LOG_RETENTION",
    "LOG_ROOT_DIR",
    "LOG_CONSOLE",
    "LOG_CONSOLE_LEVEL",
    "LOG_MONTH_FORMAT",
    "LOG_USE_UTC",
)


def _settings() -> CyberguardLogSettings:
    """
    ENV/.env lalu overlay dari Quart app.config (jika ada context).
    Prioritas: app.config > ENV/.env.
    """
    _load_env_once()
    s = CyberguardLogSettings()
    if not has_app_context():
        return s

    cfg = current_app.config
    overrides = {
        key[4:].lower(): cfg[key]
        for key in _OVERLAY_KEYS
        if key in cfg and cfg[key] is not None
    }
    if not overrides:
        return s
    return s.model_copy(update=overrides)


# ==========
# Utilities
# ==========
def _to_level(level: str) -> int:
    return getattr(logging, str(level).upper(), logging.INFO)


def _monthly_dir_factory_for(s: CyberguardLogSettings) -> Callable[[datetime], Path]:
    base = Path(s.root_dir or _detect_project_root()) / "logs"

    def _factory(dt: datetime) -> Path:
        p = base / dt.strftime(s.month_format)
        p.mkdir(parents=True, exist_ok=True)
        return p

    return _factory


class MonthAwareTimedRotatingFileHandler(TimedRotatingFileHandler):
    """
    - Rotasi harian dari stdlib (midnight).
    - Setelah rotasi, baseFilename dipindah ke direktori bulan terkini.
    """

    def __init__(
        self,
        base_name: str,
        month_dir_factory: Callable[[datetime], Path],
        backupCount: int = 90,
        utc: bool = False,
    ):
        self._base_name = base_name
        self._month_dir_factory = month_dir_factory
        init_dir = month_dir_factory(self._now(utc))
        super().__init__(
            filename=str(init_dir / base_name),
            when="midnight",
            backupCount=backupCount,
            encoding="utf-8",
            utc=utc,
        )

    @staticmethod
    def _now(utc: bool) -> datetime:
        return datetime.utcnow() if utc else datetime.now()

    def doRollover(self):
        super().doRollover()
        # file base baru harus di direktori bulan terkini
        new_path = str(self._month_dir_factory(self._now(self.utc)) / self._base_name)
        if new_path != self.baseFilename:
            if self.stream:
                self.stream.close()
            self.baseFilename = new_path
            self.stream = self._open()


# ===================================
# get_logger(name): lazy & race-safe
# ===================================
_init_lock = threading.Lock()
_inited_loggers: set[str] = set()


def _console_handler(s: CyberguardLogSettings, formatter: logging.Formatter) -> logging.Handler:
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(_to_level(s.console_level or s.level))
    ch.setFormatter(formatter)
    return ch


def get_logger(name: str) -> logging.Logger:
    """
    Logger 2-mode (file/stdout):
      - Per-module logfile: logs/YYYY-MM/<last-segment>.log (mode file)
      - Rotasi harian + retensi (default 90)
      - Idempotent & thread-safe (hindari duplikasi handler)
      - Overlay config dari Quart app.config jika ada
    """
    s = _settings()
    mode = (s.mode or "file").lower().strip()

    logger = logging.getLogger(name)
    logger.setLevel(_to_level(s.level))
    logger.propagate = False

    if name in _inited_loggers and logger.handlers:
        return logger

    with _init_lock:
        if name in _inited_loggers and logger.handlers:
            return logger

        formatter = logging.Formatter(fmt=s.format, datefmt=s.datefmt)

        if mode == "stdout":
            logger.addHandler(_console_handler(s, formatter))
        else:
            last_segment = (name.rsplit(".", 1)[-1] or "app").replace(":", "_")
            fh = MonthAwareTimedRotatingFileHandler(
                base_name=f"{last_segment}.log",
                month_dir_factory=_monthly_dir_factory_for(s),
                backupCount=int(s.retention),
                utc=bool(s.use_utc),
            )
            fh.setLevel(_to_level(s.level))
            fh.setFormatter(formatter)
            logger.addHandler(fh)

            if s.console:
                logger.addHandler(_console_handler(s, formatter))

        _inited_loggers.add(name)

    return logger
