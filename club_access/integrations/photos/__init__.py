from .client import PhotoStore
from .client import PhotoUploadError
from .client import UploadedPhoto
from .client import get_photo_store

__all__ = ["PhotoStore", "PhotoUploadError", "UploadedPhoto", "get_photo_store"]
