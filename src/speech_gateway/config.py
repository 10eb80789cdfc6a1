from dataclasses import dataclass
from typing import Dict
from urllib.parse import quote

BASE64_PATH = "/speechRecognition/v1/base64"
FILE_PATH = "/speechRecognition/v1/file"
LARGE_FILE_PATH = "/speechRecognition/v1/largeFile"
TRACKING_PATH = "/speechRecognition/v1/trackingText"
LINK_PATH = "/speechRecognition/v1/link"


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the speech recognition gateway.

    Both values are kept exactly as given. The endpoint URL is used as a
    plain prefix for the request paths, so it should not end with a slash.
    """

    endpoint_url: str
    gateway_token: str

    def url_for(self, path: str) -> str:
        return f"{self.endpoint_url}{path}"

    def tracking_url(self, token: str) -> str:
        """Build the polling URL for a job token.

        Args:
            token: Job token returned by one of the submission endpoints

        Returns:
            URL with the token percent-encoded as a single path segment
        """
        segment = quote(token, safe="")
        if segment in (".", ".."):
            # Bare dot segments would be collapsed by URL normalization.
            segment = segment.replace(".", "%2E")
        return self.url_for(f"{TRACKING_PATH}/{segment}")

    def auth_headers(self) -> Dict[str, str]:
        return {"gateway-token": self.gateway_token}
