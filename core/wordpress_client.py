"""
WordPress REST API client

Talks to /wp-json/wp/v2 with Basic authentication built from a username and
an Application Password.
"""

import base64
import logging
from typing import Dict, Optional
import requests

from core.config import Config


def build_basic_auth_header(username: str, application_password: str) -> str:
    """
    Build the Authorization header value for WordPress Application Passwords

    Examples:
        >>> build_basic_auth_header("admin", "abcd efgh")
        'Basic YWRtaW46YWJjZCBlZmdo'
    """
    token = base64.b64encode(f"{username}:{application_password}".encode('utf-8')).decode('ascii')
    return f"Basic {token}"


class WordPressClient:
    """Client for a single WordPress site"""

    def __init__(
        self,
        site_url: str,
        username: str,
        application_password: str,
        session: Optional[requests.Session] = None
    ):
        self.site_url = site_url.rstrip('/')
        self.api_url = f"{self.site_url}/wp-json/wp/v2"
        self.session = session or requests.Session()
        self.auth_header = build_basic_auth_header(username, application_password)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {'Authorization': self.auth_header}
        if extra:
            headers.update(extra)
        return headers

    def verify_credentials(self) -> bool:
        """
        Check the credentials by fetching the authenticated user

        Returns:
            True if WordPress answered 200, False on any error
        """
        try:
            response = self.session.get(
                f"{self.api_url}/users/me",
                headers=self._headers(),
                timeout=Config.SHORT_TIMEOUT
            )
            return response.status_code == 200
        except requests.RequestException as e:
            self.logger.error(f"Error verifying WordPress credentials for {self.site_url}: {e}")
            return False

    def create_post(self, title: str, content: str, status: str = 'draft') -> Dict:
        """
        Create a post

        Returns:
            WordPress post JSON (contains 'id' and 'link')
        """
        payload = {
            'title': title,
            'content': content,
            'status': status,
            'categories': [],
            'tags': [],
            'featured_media': 0,
            'comment_status': 'open'
        }
        response = self.session.post(
            f"{self.api_url}/posts",
            json=payload,
            headers=self._headers({'Content-Type': 'application/json'}),
            timeout=Config.DEFAULT_TIMEOUT
        )
        response.raise_for_status()
        return response.json()

    def upload_media(self, filename: str, data: bytes, content_type: str = 'image/jpeg') -> Dict:
        """
        Upload a file to the media library

        Returns:
            WordPress media JSON (contains 'id')
        """
        response = self.session.post(
            f"{self.api_url}/media",
            files={'file': (filename, data, content_type)},
            headers=self._headers({'Content-Disposition': f'attachment; filename={filename}'}),
            timeout=Config.LONG_TIMEOUT
        )
        response.raise_for_status()
        return response.json()

    def set_featured_media(self, post_id: int, media_id: int) -> Dict:
        """Attach an uploaded media item as the post's featured image"""
        response = self.session.post(
            f"{self.api_url}/posts/{post_id}",
            json={'featured_media': media_id},
            headers=self._headers({'Content-Type': 'application/json'}),
            timeout=Config.DEFAULT_TIMEOUT
        )
        response.raise_for_status()
        return response.json()
