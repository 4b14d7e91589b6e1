from .file_store_port import FileStorePort
from .key_value_port import KeyValuePort
from .permission_port import PermissionPort

__all__ = ["FileStorePort", "KeyValuePort", "PermissionPort"]
