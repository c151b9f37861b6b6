# dicebot/logging_config.py
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
import gzip
import os
import shutil
from datetime import datetime

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"

BACKUP_COUNT = 30

def _prune_backups(log_dir: Path, keep: int = BACKUP_COUNT):
    # 檔名是 YYYY-MM-DD.log.gz，字串排序即日期排序
    backups = sorted(log_dir.glob("????-??-??.log.gz"))
    for old in backups[:max(len(backups) - keep, 0)]:
        old.unlink()

def _gzip_rotator(source: str, dest: str):
    """把旋轉出的檔案壓成 .gz，並只保留最近 BACKUP_COUNT 份"""
    # 例：dest=logs/latest.log.2025-08-13 → logs/2025-08-13.log.gz
    date_str = Path(dest).name.split(".")[-1]
    out = Path(dest).with_name(f"{date_str}.log.gz")

    with open(source, "rb") as f_in, gzip.open(out, "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    os.remove(source)
    # TimedRotatingFileHandler 只認得 latest.log.* 的舊檔，.gz 要自己清
    _prune_backups(out.parent)

def setup_logging(log_dir: str = "logs", level: str = "INFO"):
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)

    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))

    # 檔案：latest.log（午夜輪替，保留 30 份，歷史自動 .gz）
    fh = TimedRotatingFileHandler(
        str(Path(log_dir) / "latest.log"),
        when="midnight",
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
        utc=False,
    )
    fh.rotator = _gzip_rotator
    fh.setFormatter(formatter)
    root.addHandler(fh)

    # 終端
    sh = logging.StreamHandler()
    sh.setFormatter(formatter)
    root.addHandler(sh)

    # 開機時打一行，方便看分隔
    root.info("==== Bot started at %s ====", datetime.now().strftime(DATEFMT))
