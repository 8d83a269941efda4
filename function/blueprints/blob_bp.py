# ============================================================================
# BLOB BLUEPRINT
# ============================================================================
# STATUS: Gateway - Upload notifications
# PURPOSE: Log every blob written to the uploads container
# CREATED: 18 OCT 2026
# ============================================================================
"""
Blob Blueprint

Logs name, size and a short text preview of each new blob in `uploads`.
Nothing is stored.
"""

import logging
from typing import Any, Dict, Optional

import azure.functions as func

from core.config import BlobContainer, STORAGE_CONNECTION_SETTING, get_defaults

logger = logging.getLogger(__name__)
blob_bp = func.Blueprint()


def upload_name(blob_path: str) -> str:
    """The {name} part of a blob path: the container prefix is removed."""
    prefix = f"{BlobContainer.UPLOADS.value}/"
    return blob_path[len(prefix):] if blob_path.startswith(prefix) else blob_path


def describe_upload(name: str, content: bytes, preview_chars: Optional[int] = None) -> Dict[str, Any]:
    """Name, byte size and leading text of an uploaded blob."""
    if preview_chars is None:
        preview_chars = get_defaults().preview.preview_chars
    text = content.decode("utf-8", errors="replace")
    return {
        "name": name,
        "size": len(content),
        "preview": text[:preview_chars],
    }


@blob_bp.blob_trigger(
    arg_name="blob",
    path=f"{BlobContainer.UPLOADS.value}/{{name}}",
    connection=STORAGE_CONNECTION_SETTING,
)
def process_upload(blob: func.InputStream) -> None:
    info = describe_upload(upload_name(blob.name), blob.read())
    logger.info(f"Blob trigger processed: {info['name']}, Size: {info['size']} bytes")
    logger.info(f"Content preview: {info['preview']}")


__all__ = ["blob_bp", "describe_upload", "upload_name"]
