"""S3 Stream Uploader コアモジュール"""
from .backend import StorageBackend, S3Backend
from .channel import EventStream
from .finalizer import Finalizer
from .orchestrator import Orchestrator, UploadState, send
from .s3_client import S3ClientManager
from .uploader import PartUploader

__all__ = [
    'StorageBackend',
    'S3Backend',
    'EventStream',
    'Finalizer',
    'Orchestrator',
    'UploadState',
    'send',
    'S3ClientManager',
    'PartUploader',
]
