"""Google Drive source for DocIndexLib.

Talks to the Drive v3 API through google-api-python-client. Each folder
is listed with two queries, one for sub-folders and one for files, and
every page of results is followed.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..core.adapter import NodeSource
from ..core.node import DocumentNode, NodeKind
from ..errors import TraversalError

logger = logging.getLogger(__name__)

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
READONLY_SCOPE = "https://www.googleapis.com/auth/drive.readonly"
FILE_FIELDS = "id, name, mimeType, webViewLink"
PAGE_SIZE = 1000

_ID_PATTERNS = [
    re.compile(r"/folders/([\w-]+)"),
    re.compile(r"/d/([\w-]+)"),
    re.compile(r"[?&]id=([\w-]+)"),
]
_BARE_ID = re.compile(r"^[\w-]+$")


class DriveNode(DocumentNode):
    """A Drive file or folder, built from a Drive API file resource."""

    def __init__(self, file_id: str, name: str, mime_type: str, web_view_link: Optional[str] = None):
        self.file_id = file_id
        self._name = name
        self._mime_type = mime_type
        self._kind = NodeKind.FOLDER if mime_type == FOLDER_MIME_TYPE else NodeKind.FILE
        self._url = web_view_link or default_url(file_id, self._kind)

    @classmethod
    def from_resource(cls, resource: Mapping[str, Any]) -> 'DriveNode':
        return cls(resource['id'], resource['name'], resource['mimeType'], resource.get('webViewLink'))

    @property
    def kind(self) -> NodeKind:
        return self._kind

    def identifier(self) -> str:
        return self.file_id

    def name(self) -> str:
        return self._name

    def url(self) -> str:
        return self._url

    def mime_type(self) -> Optional[str]:
        return self._mime_type if self._kind is NodeKind.FILE else None


def default_url(file_id: str, kind: NodeKind) -> str:
    if kind is NodeKind.FOLDER:
        return f"https://drive.google.com/drive/folders/{file_id}"
    return f"https://drive.google.com/file/d/{file_id}/view"


def extract_file_id(reference: str) -> str:
    """Pull a Drive file id out of a sharing URL, or accept a bare id.

    Raises:
        ValueError: If no id can be found
    """
    reference = reference.strip()
    for pattern in _ID_PATTERNS:
        match = pattern.search(reference)
        if match:
            return match.group(1)
    if _BARE_ID.match(reference):
        return reference
    raise ValueError(f"Not a Drive URL or file id: '{reference}'")


def quote_query_value(value: str) -> str:
    """Escape a value for use inside a single-quoted Drive query string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_drive_service(credentials_file: str):
    """Create a read-only Drive v3 service from a service-account key file."""
    credentials = service_account.Credentials.from_service_account_file(
        credentials_file, scopes=[READONLY_SCOPE])
    return build('drive', 'v3', credentials=credentials, cache_discovery=False)


class DriveNodeSource(NodeSource):
    """NodeSource backed by the Drive v3 ``files`` collection.

    Trashed items are never listed. Shared-drive items are included.
    """

    def __init__(self, service):
        """
        Args:
            service: A Drive v3 service, e.g. from build_drive_service()
        """
        self.service = service

    def _list(self, folder: DocumentNode, folders: bool) -> List[DriveNode]:
        operator = "=" if folders else "!="
        query = (f"'{quote_query_value(folder.identifier())}' in parents "
                 f"and mimeType {operator} '{FOLDER_MIME_TYPE}' and trashed = false")
        children = []
        page_token = None
        while True:
            response = self.service.files().list(
                q=query,
                fields=f"nextPageToken, files({FILE_FIELDS})",
                pageSize=PAGE_SIZE,
                pageToken=page_token,
                supportsAllDrives=True,
                includeItemsFromAllDrives=True,
            ).execute()
            children.extend(DriveNode.from_resource(r) for r in response.get('files', []))
            page_token = response.get('nextPageToken')
            if not page_token:
                break
        return children

    def child_folders(self, folder: DocumentNode) -> List[DriveNode]:
        return self._list(folder, folders=True)

    def child_files(self, folder: DocumentNode) -> List[DriveNode]:
        return self._list(folder, folders=False)

    def resolve(self, reference: str) -> DriveNode:
        """Fetch the node named by a Drive URL or id.

        Raises:
            TraversalError: If the reference is malformed or the API refuses it
        """
        try:
            file_id = extract_file_id(reference)
        except ValueError as e:
            raise TraversalError(reference, str(e)) from e

        try:
            resource: Dict[str, Any] = self.service.files().get(
                fileId=file_id, fields=FILE_FIELDS, supportsAllDrives=True).execute()
        except HttpError as e:
            raise TraversalError(file_id, f"Cannot open Drive item '{file_id}': {e}") from e
        logger.debug("Resolved %s to '%s'", reference, resource.get('name'))
        return DriveNode.from_resource(resource)
