# infrastructure/config/settings.py
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

# プロジェクトルート
PROJECT_ROOT = Path(__file__).parent.parent.parent

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    forms_dir: Path
    upload_dir: Path
    log_level: str = "INFO"
    method_override: bool = True

    @classmethod
    def load(cls, env_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        .envファイルと環境変数から設定を読み込む（環境変数を優先）

        Keys: FORMBIND_FORMS_DIR, FORMBIND_UPLOAD_DIR, FORMBIND_LOG_LEVEL,
        FORMBIND_METHOD_OVERRIDE
        """
        env_path = env_path or PROJECT_ROOT / ".env"
        values = {k: v for k, v in dotenv_values(env_path).items() if v is not None} if env_path.exists() else {}
        values.update(os.environ if environ is None else environ)

        forms_dir = values.get("FORMBIND_FORMS_DIR")
        upload_dir = values.get("FORMBIND_UPLOAD_DIR")
        return cls(
            forms_dir=Path(forms_dir) if forms_dir else PROJECT_ROOT / "forms",
            upload_dir=Path(upload_dir) if upload_dir else Path(tempfile.gettempdir()),
            log_level=values.get("FORMBIND_LOG_LEVEL", "INFO").upper(),
            method_override=values.get("FORMBIND_METHOD_OVERRIDE", "true").strip().lower() in _TRUE_VALUES,
        )
