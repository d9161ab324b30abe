import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    db_path: str = os.getenv("EXAM_RESULTS_DB_PATH", "data/exam_results.db")

    admin_username: str = os.getenv("EXAM_RESULTS_ADMIN_USERNAME", "admin")
    admin_password: str = os.getenv("EXAM_RESULTS_ADMIN_PASSWORD", "admin123")

    web_mode: bool = os.getenv("EXAM_RESULTS_WEB", "0") == "1"
    port: int = int(os.getenv("PORT", "8550"))
    log_level: str = os.getenv("EXAM_RESULTS_LOG_LEVEL", "INFO").upper()


settings = Settings()
