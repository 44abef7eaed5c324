import base64
import binascii
import ipaddress
import logging
import re
import socket
import uuid
from typing import List, Optional, Tuple

import boto3
import httpx
from botocore.exceptions import ClientError

from app.config import Settings
from app.core.errors import ValidationError

logger = logging.getLogger(__name__)

_DATA_URI = re.compile(r"^data:(image/[\w.+-]+);base64,(.+)$", re.DOTALL)

# Only raster formats; anything else is rejected
_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

INVALID_PICTURE = "Invalid profile picture"
PICTURE_TOO_LARGE = "Profile picture is too large"


def _resolve_addresses(host: str, port: int) -> List[str]:
    """All IP addresses ``host`` resolves to"""
    infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    return [info[4][0].split("%")[0] for info in infos]


class ProfilePictureStorage:
    """Hosts profile pictures in an S3 bucket and hands back their public URL"""

    def __init__(self, settings: Settings, s3_client=None, http_client: Optional[httpx.Client] = None):
        if not settings.s3_bucket_name:
            raise ValueError("S3 bucket name must be configured for profile pictures")

        self.s3_client = s3_client or boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.http_client = http_client
        self.bucket_name = settings.s3_bucket_name
        self.region = settings.aws_region
        self.public_base_url = (settings.s3_public_base_url or "").rstrip("/")
        self.prefix = settings.profile_pictures_prefix.strip("/")
        self.fetch_timeout = settings.image_fetch_timeout
        self.max_bytes = settings.max_profile_picture_bytes

    def upload(self, user_id: str, picture: str) -> str:
        """Upload a data URI or remote image URL and return the hosted URL"""
        content, content_type = self._load(picture)
        key = f"{self.prefix}/{user_id}/{uuid.uuid4().hex}.{_EXTENSIONS[content_type]}"
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type
            )
        except ClientError as e:
            logger.error(f"Failed to upload profile picture to S3: {str(e)}")
            raise
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def _load(self, picture: str) -> Tuple[bytes, str]:
        picture = picture.strip()
        match = _DATA_URI.match(picture)
        if match:
            content_type = match.group(1).lower()
            if content_type not in _EXTENSIONS:
                raise ValidationError(INVALID_PICTURE)
            encoded = match.group(2)
            # 4 base64 characters carry 3 bytes
            if len(encoded) // 4 * 3 > self.max_bytes + 3:
                raise ValidationError(PICTURE_TOO_LARGE)
            try:
                content = base64.b64decode(encoded, validate=True)
            except (binascii.Error, ValueError):
                raise ValidationError(INVALID_PICTURE)
            if not content:
                raise ValidationError(INVALID_PICTURE)
            if len(content) > self.max_bytes:
                raise ValidationError(PICTURE_TOO_LARGE)
            return content, content_type

        if picture.startswith(("http://", "https://")):
            return self._fetch(picture)

        raise ValidationError(INVALID_PICTURE)

    def _check_destination(self, url: httpx.URL) -> None:
        """Refuse hosts that resolve to loopback, private, link-local or other non-public addresses"""
        if not url.host:
            raise ValidationError(INVALID_PICTURE)
        port = url.port or (443 if url.scheme == "https" else 80)
        try:
            addresses = _resolve_addresses(url.host, port)
        except (socket.gaierror, UnicodeError):
            raise ValidationError(INVALID_PICTURE)
        for address in addresses:
            if not ipaddress.ip_address(address).is_global:
                logger.warning("Refused profile picture fetch from %s (%s)", url.host, address)
                raise ValidationError(INVALID_PICTURE)

    def _fetch(self, raw_url: str) -> Tuple[bytes, str]:
        try:
            url = httpx.URL(raw_url)
        except httpx.InvalidURL:
            raise ValidationError(INVALID_PICTURE)
        self._check_destination(url)

        if self.http_client is not None:
            return self._download(self.http_client, url)
        with httpx.Client() as client:
            return self._download(client, url)

    def _download(self, client: httpx.Client, url: httpx.URL) -> Tuple[bytes, str]:
        # No redirects: only the checked host is contacted
        with client.stream("GET", url, timeout=self.fetch_timeout, follow_redirects=False) as response:
            if response.status_code != 200:
                logger.info("Profile picture fetch returned %s for %s", response.status_code, url)
                raise ValidationError(INVALID_PICTURE)

            content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
            if content_type not in _EXTENSIONS:
                raise ValidationError(INVALID_PICTURE)

            declared = response.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > self.max_bytes:
                raise ValidationError(PICTURE_TOO_LARGE)

            content = bytearray()
            for chunk in response.iter_bytes():
                content.extend(chunk)
                if len(content) > self.max_bytes:
                    raise ValidationError(PICTURE_TOO_LARGE)

        if not content:
            raise ValidationError(INVALID_PICTURE)
        return bytes(content), content_type
