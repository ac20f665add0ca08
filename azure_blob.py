# azure_blob.py
import logging
import os
import uuid

from azure.storage.blob import BlobServiceClient

from config import config

logger = logging.getLogger(__name__)

_blob_service = None


def get_blob_service() -> BlobServiceClient:
     """Create the client on first use so imports don't need credentials."""
     global _blob_service
     if _blob_service is None:
          if not config.AZURE_STORAGE_ACCOUNT or not config.AZURE_STORAGE_KEY:
               raise RuntimeError("Azure Blob Storage is not configured")
          _blob_service = BlobServiceClient.from_connection_string(
               f"DefaultEndpointsProtocol=https;"
               f"AccountName={config.AZURE_STORAGE_ACCOUNT};"
               f"AccountKey={config.AZURE_STORAGE_KEY};"
               f"EndpointSuffix=core.windows.net"
          )
     return _blob_service


def upload_to_blob(file, container: str, owner_id: str | int) -> str:
     """Upload a FastAPI UploadFile under <owner_id>/<uuid><ext> and return its URL."""
     ext = os.path.splitext(file.filename or "")[1]
     filename = f"{owner_id}/{uuid.uuid4()}{ext}"
     blob_client = get_blob_service().get_blob_client(container=container, blob=filename)
     blob_client.upload_blob(file.file, overwrite=True)
     logger.info("Uploaded %s to container %s", filename, container)
     return f"https://{config.AZURE_STORAGE_ACCOUNT}.blob.core.windows.net/{container}/{filename}"


def delete_from_blob(blob_url: str) -> None:
     """
     Deletes a file from Azure Blob Storage using its full URL
     """
     path = blob_url.split(".blob.core.windows.net/", 1)[-1]
     container, _, blob_name = path.partition("/")
     blob_client = get_blob_service().get_blob_client(
          container=container,
          blob=blob_name
     )
     blob_client.delete_blob()
