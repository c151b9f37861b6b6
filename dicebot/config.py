from __future__ import annotations

import json
from dataclasses import dataclass, asdict, field
from pathlib import Path
import logging
from typing import List

logger = logging.getLogger("dicebot")

@dataclass
class DiceSettings:
    max_dice: int = 100             # 單一骰式的骰子顆數上限（避免回覆超過訊息長度）
    entropy_block_size: int = 128   # 亂數緩衝區大小（bytes）

@dataclass
class GlobalConfig:
    dev_user_ids: List[int] = field(default_factory=list)
    dice: DiceSettings = field(default_factory=DiceSettings)

class ConfigManager:
    def __init__(self, data_dir: str = "data"):
        self.global_path = Path(data_dir) / "config.global.json"
        self.global_path.parent.mkdir(parents=True, exist_ok=True)
        self.global_config = self._load_global()

    # ---------- Global ----------
    def _load_global(self) -> GlobalConfig:
        try:
            if self.global_path.exists():
                raw = json.loads(self.global_path.read_text(encoding="utf-8"))
                d = raw.get("dice", {})
                return GlobalConfig(
                    dev_user_ids=[int(x) for x in raw.get("dev_user_ids", [])],
                    dice=DiceSettings(
                        max_dice=int(d.get("max_dice", 100)),
                        entropy_block_size=int(d.get("entropy_block_size", 128)),
                    ),
                )
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.error(f"讀取全域設定失敗：{e}，使用預設值")
        return GlobalConfig()

    def _save_global(self):
        payload = asdict(self.global_config)
        self.global_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info("全域設定已儲存")

    # Developer（全域）
    def get_dev_user_ids(self) -> List[int]:
        return list(self.global_config.dev_user_ids)

    def add_dev_user(self, user_id: int):
        if user_id not in self.global_config.dev_user_ids:
            self.global_config.dev_user_ids.append(user_id)
            self._save_global()

    def remove_dev_user(self, user_id: int):
        if user_id in self.global_config.dev_user_ids:
            self.global_config.dev_user_ids.remove(user_id)
            self._save_global()

    def is_developer(self, user_id: int) -> bool:
        return user_id in self.global_config.dev_user_ids

    # Dice
    def get_dice_settings(self) -> DiceSettings:
        return self.global_config.dice

    def set_max_dice(self, n: int):
        n = int(n)
        if n < 1:
            raise ValueError("max_dice 必須 >= 1")
        self.global_config.dice.max_dice = n
        self._save_global()
