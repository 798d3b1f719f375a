"""設定管理用のデータクラス"""
from dataclasses import asdict, dataclass, field, replace
from typing import Dict, List, Mapping, Optional
import json
import os


KILOBYTE = 1024
MEGABYTE = KILOBYTE * 1024

# リージョンを使わないサービス（DigitalOcean Spacesなど）向けのデフォルト
DEFAULT_REGION = "us-east-1"
DEFAULT_MAX_RETRIES = 3
DEFAULT_MAX_PART_SIZE = 5 * MEGABYTE

# 環境変数名 -> UploadConfigのフィールド名
ENV_VARS = {
    "ACCESS_KEY": "access_key",
    "SECRET_KEY": "secret_key",
    "ENDPOINT": "endpoint",
    "REGION": "region",
    "BUCKET": "bucket",
}


@dataclass
class LoggingConfig:
    """ロギング設定"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass(frozen=True)
class UploadConfig:
    """マルチパートアップロードの設定

    アップロード中は変更されない。必須項目（access_key, secret_key, bucket）の
    チェックは送信時に行い、エラーはイベントとして通知される。
    """
    bucket: str = ""
    access_key: str = ""
    secret_key: str = ""
    endpoint: Optional[str] = None
    region: str = DEFAULT_REGION
    key: Optional[str] = None
    max_retries: int = DEFAULT_MAX_RETRIES
    max_part_size: int = DEFAULT_MAX_PART_SIZE

    def __post_init__(self):
        """数値項目のバリデーション"""
        if self.max_retries < 1:
            raise ValueError(
                f"Invalid max_retries: {self.max_retries}. Must be at least 1"
            )
        if self.max_part_size < 1:
            raise ValueError(
                f"Invalid max_part_size: {self.max_part_size}. Must be a positive number of bytes"
            )

    def missing_fields(self) -> List[str]:
        """未設定の必須項目名を返す"""
        missing = []
        if not self.access_key:
            missing.append("accessKey")
        if not self.secret_key:
            missing.append("secretKey")
        if not self.bucket:
            missing.append("bucket")
        return missing

    def with_key(self, key: Optional[str]) -> 'UploadConfig':
        """保存先キーを差し替えたコピーを返す"""
        if key is None or key == self.key:
            return self
        return replace(self, key=key)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional['UploadConfig'] = None,
        **overrides
    ) -> 'UploadConfig':
        """環境変数から設定を作成

        優先順位は overrides > 環境変数 > base。
        overridesのNoneや空文字は未指定として扱う。
        """
        if environ is None:
            environ = os.environ

        values: Dict[str, object] = asdict(base) if base is not None else {}
        for env_name, field_name in ENV_VARS.items():
            value = environ.get(env_name)
            if value:
                values[field_name] = value

        for name, value in overrides.items():
            if value is not None and value != "":
                values[name] = value

        return cls(**values)


@dataclass
class Config:
    """メイン設定クラス"""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)

    @classmethod
    def from_file(cls, config_path: str) -> 'Config':
        """設定ファイルから読み込み"""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file {config_path} not found.")

        try:
            with open(config_path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error decoding JSON from {config_path}: {e}")

        try:
            # 各セクションをパース
            logging_config = LoggingConfig(**data.get("logging", {}))
            upload_config = UploadConfig(**data.get("upload", {}))
        except Exception as e:
            raise RuntimeError(f"Error loading configuration: {e}")

        return cls(logging=logging_config, upload=upload_config)
