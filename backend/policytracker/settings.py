from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_data_dir() -> Path:
    # backend/policytracker/settings.py -> parents[1]=backend
    return Path(__file__).resolve().parents[1] / "data"


class Settings(BaseSettings):
    """環境変数から設定を読み込む。"""

    data_dir: Path = Field(default_factory=_default_data_dir, description="トピック別の政策JSONを置くディレクトリ")
    openai_api_key: str | None = None
    gemini_api_key: str | None = None
    openai_score_model: str = Field(default="gpt-5-mini")
    gemini_score_model: str = Field(default="models/gemini-2.0-flash")
    agent_score_provider: str = Field(
        default="auto",
        description="スコアリングに使うプロバイダ（auto|gemini|openai）",
    )
    agent_debug: bool = Field(default=False, description="スコアリングのデバッグ出力を有効化")
    request_interval_sec: float = Field(default=2.0, ge=0, description="スコアリング要求の間隔（レート制限対策）")
    default_bandwidth: float = Field(default=0.25, gt=0, le=1, description="加重LOESSの既定バンド幅")
    default_span: float = Field(default=0.25, gt=0, le=1, description="日付トレンド（非加重）の既定スパン")

    model_config = SettingsConfigDict(
        env_file=["../.env", ".env"],
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
