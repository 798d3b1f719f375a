"""S3クライアント管理"""
import boto3
from typing import Optional
from botocore.config import Config as BotoConfig
from botocore.exceptions import NoCredentialsError
from ..models.config import UploadConfig
from ..utils.logger import LoggerManager


def normalize_endpoint(endpoint: Optional[str]) -> Optional[str]:
    """スキームのないホスト名（例: sfo2.digitaloceanspaces.com）をURLにする"""
    if not endpoint:
        return None
    if "://" in endpoint:
        return endpoint
    return f"https://{endpoint}"


class S3ClientManager:
    """S3クライアントの作成と管理"""

    def __init__(self, upload_config: UploadConfig):
        self.upload_config = upload_config
        self.logger = LoggerManager.get_logger()
        self._client = None

    def get_client(self):
        """S3クライアントを取得（必要に応じて作成）"""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """静的な認証情報でS3クライアントを作成"""
        endpoint_url = normalize_endpoint(self.upload_config.endpoint)

        try:
            # リトライはパート単位で自前で行うので、SDK側のリトライは最小限にする
            s3_client = boto3.client(
                's3',
                region_name=self.upload_config.region,
                endpoint_url=endpoint_url,
                aws_access_key_id=self.upload_config.access_key,
                aws_secret_access_key=self.upload_config.secret_key,
                config=BotoConfig(retries={'max_attempts': 1, 'mode': 'standard'}),
            )
            self.logger.info(
                f"S3 client created for {endpoint_url or 'AWS'} ({self.upload_config.region})."
            )
            return s3_client

        except NoCredentialsError:
            self.logger.error("AWS credentials not available.")
            raise
        except Exception as e:
            self.logger.error(f"Error creating S3 client: {e}")
            raise
