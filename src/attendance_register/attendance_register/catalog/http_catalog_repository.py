from __future__ import annotations

from typing import Sequence

from ..core.constants import CATALOG_PATH
from ..transport.connection import ApiConnection
from ..transport.http_base import as_list, segment
from .model import Course


class HttpCatalogRepository:
    def __init__(self, conn: ApiConnection, *, path_template: str = CATALOG_PATH):
        self._conn = conn
        self._path_template = path_template

    def list_courses(self, batch_id: str) -> Sequence[Course]:
        data = self._conn.get(self._path_template.format(batch_id=segment(batch_id)))
        return [Course.from_api(raw) for raw in as_list(data)]
