"""ストレージバックエンドの抽象化"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..models.config import UploadConfig
from ..models.session import Part
from .s3_client import S3ClientManager


class StorageBackend(ABC):
    """マルチパートアップロードに必要な操作

    失敗はすべて例外で通知する。
    """

    @abstractmethod
    def initiate(self, bucket: str, key: str, content_type: str) -> str:
        """マルチパートアップロードを開始してupload_idを返す"""

    @abstractmethod
    def upload_part(self, upload_id: str, key: str, part_number: int, data: bytes) -> str:
        """1パートをアップロードしてETagを返す"""

    @abstractmethod
    def complete_upload(self, upload_id: str, key: str, parts: List[Part]) -> Dict[str, Any]:
        """パート番号順のパートを結合してアップロードを完了する"""

    @abstractmethod
    def abort_upload(self, upload_id: str, key: str) -> None:
        """アップロードを中断し、アップロード済みパートを破棄する"""


class S3Backend(StorageBackend):
    """boto3のS3クライアントを使うバックエンド"""

    def __init__(self, s3_client, bucket: str):
        self.s3_client = s3_client
        self.bucket = bucket

    @classmethod
    def from_config(cls, upload_config: UploadConfig) -> 'S3Backend':
        client_manager = S3ClientManager(upload_config)
        return cls(client_manager.get_client(), upload_config.bucket)

    def initiate(self, bucket: str, key: str, content_type: str) -> str:
        self.bucket = bucket
        response = self.s3_client.create_multipart_upload(
            Bucket=bucket,
            Key=key,
            ContentType=content_type,
        )
        return response['UploadId']

    def upload_part(self, upload_id: str, key: str, part_number: int, data: bytes) -> str:
        response = self.s3_client.upload_part(
            Bucket=self.bucket,
            Key=key,
            UploadId=upload_id,
            PartNumber=part_number,
            Body=data,
            ContentLength=len(data),
        )
        return response['ETag']

    def complete_upload(self, upload_id: str, key: str, parts: List[Part]) -> Dict[str, Any]:
        response = self.s3_client.complete_multipart_upload(
            Bucket=self.bucket,
            Key=key,
            UploadId=upload_id,
            MultipartUpload={'Parts': [part.to_s3() for part in parts]},
        )
        # HTTPヘッダーなどのメタ情報は結果に含めない
        return {k: v for k, v in response.items() if k != 'ResponseMetadata'}

    def abort_upload(self, upload_id: str, key: str) -> None:
        self.s3_client.abort_multipart_upload(
            Bucket=self.bucket,
            Key=key,
            UploadId=upload_id,
        )
