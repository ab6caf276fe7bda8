"""S3 Chunk Uploader コアモジュール"""
from .s3_client import S3ClientManager
from .object_store import ObjectStoreClient, S3ObjectStore
from .planner import plan_parts, count_parts
from .task_queue import BoundedTaskQueue, QueueOutcome
from .uploader import UploadCoordinator

__all__ = [
    'S3ClientManager',
    'ObjectStoreClient',
    'S3ObjectStore',
    'plan_parts',
    'count_parts',
    'BoundedTaskQueue',
    'QueueOutcome',
    'UploadCoordinator',
]
