"""Ortam değişkenlerinden okunan uygulama ayarları.

Proje kökündeki .env dosyası varsa yüklenir; mevcut ortam değişkenleri
ezilmez.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_REGION = "us-west-2"
DEFAULT_MODEL_ID = "us.amazon.nova-lite-v1:0"
DEFAULT_DATA_DIR = ".dashboard_data"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


@dataclass
class Settings:
    region_name: str = DEFAULT_REGION
    model_id: str = DEFAULT_MODEL_ID
    data_dir: str = DEFAULT_DATA_DIR
    log_level: str = "INFO"


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Ayarları .env ve ortam değişkenlerinden okur."""
    load_dotenv(env_file or PROJECT_ROOT / ".env", override=False)
    return Settings(
        region_name=os.environ.get("AWS_DEFAULT_REGION", DEFAULT_REGION),
        model_id=os.environ.get("DASHBOARD_MODEL_ID", DEFAULT_MODEL_ID),
        data_dir=os.environ.get("DASHBOARD_DATA_DIR", DEFAULT_DATA_DIR),
        log_level=os.environ.get("DASHBOARD_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    # boto loglarini biraz kisalim
    logging.getLogger("botocore").setLevel(logging.WARNING)
