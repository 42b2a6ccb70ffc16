from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    url: str
    public_id: str


class MediaHost(ABC):
    """
    Abstract image host.

    Contract:
    - Input: an image as a base64 data URI ("data:image/png;base64,...")
      or a remote URL the host can fetch.
    - Output: UploadResult with the public HTTPS URL and the host's asset id.
    - Raises UploadError on any failure; nothing is retried.
    - Keeps no record of the upload.
    """

    @abstractmethod
    def upload(self, image: str) -> UploadResult:
        raise NotImplementedError
