from __future__ import annotations

from flask import Flask

from ..common.serializers import catalog_to_dict
from ..common.web import current_user, json_view, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/catalog", methods=["GET"], endpoint="api_catalog")
    @login_required
    @json_view
    def api_catalog():
        user = current_user()
        index = container.catalog_store.get(user.batch_id)
        return ok(courses=catalog_to_dict(index))

    @app.route("/api/catalog/refresh", methods=["POST"], endpoint="api_catalog_refresh")
    @login_required
    @json_view
    def api_catalog_refresh():
        user = current_user()
        container.catalog_store.invalidate(user.batch_id)
        index = container.catalog_store.get(user.batch_id)
        return ok(courses=catalog_to_dict(index))
