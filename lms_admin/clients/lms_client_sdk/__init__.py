from lms_admin.clients.lms_client_sdk.config import SDKConfig
from lms_admin.clients.lms_client_sdk.errors import ApiError
from lms_admin.clients.lms_client_sdk.http_client import HttpClient
from lms_admin.clients.lms_client_sdk.normalizers import normalize_collection, normalize_record
from lms_admin.clients.lms_client_sdk.resources_client import ResourcesClient

__all__ = [
    "SDKConfig",
    "ApiError",
    "HttpClient",
    "ResourcesClient",
    "normalize_collection",
    "normalize_record",
]
