"""
utils/cloudinary.py
-----------------
Unsigned uploads to Cloudinary. Only the returned public URL is kept
by the console; uploaded files are never deleted from the host.
"""

import logging

import requests

from utils.errors import RemoteServiceError

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


class ImageUploader:

    def __init__(self, cloud_name, upload_preset, session=None, timeout=30):
        self.cloud_name = cloud_name
        self.upload_preset = upload_preset
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        return cls(
            config.get("CLOUDINARY_CLOUD_NAME", ""),
            config.get("CLOUDINARY_UPLOAD_PRESET", ""),
            timeout=config.get("UPLOAD_TIMEOUT_SECONDS", 30),
        )

    def upload(self, file, folder=None):
        """Upload a werkzeug FileStorage and return its secure URL."""
        if not self.cloud_name or not self.upload_preset:
            raise RemoteServiceError("Missing Cloudinary configuration")

        data = {"upload_preset": self.upload_preset}
        if folder:
            data["folder"] = folder
        files = {"file": (file.filename, file.stream, file.mimetype or "application/octet-stream")}

        try:
            resp = self.session.post(
                UPLOAD_URL.format(cloud_name=self.cloud_name),
                data=data,
                files=files,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Cloudinary upload of %s failed: %s", file.filename, e)
            raise RemoteServiceError(f"Cloudinary upload failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            logger.error("Cloudinary rejected %s: HTTP %s", file.filename, resp.status_code)
            raise RemoteServiceError(f"Cloudinary upload failed: {resp.text}")

        try:
            url = resp.json()["secure_url"]
        except (ValueError, KeyError) as e:
            raise RemoteServiceError("Cloudinary upload failed: no URL in response") from e

        logger.info("Uploaded %s to %s", file.filename, folder or "root folder")
        return url
