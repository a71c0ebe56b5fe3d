from __future__ import annotations

from flask import Flask, request

from ..common.http import current_context, json_endpoint, login_required, ok, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings/tax", methods=["GET"], endpoint="settings_tax")
    @login_required
    @json_endpoint
    def settings_tax():
        return ok({"tax_settings": to_json(list(container.settings_service.list_tax_settings(current_context())))})

    @app.route("/api/settings/bpjs", methods=["GET"], endpoint="settings_bpjs")
    @login_required
    @json_endpoint
    def settings_bpjs():
        return ok({"bpjs_settings": to_json(list(container.settings_service.list_bpjs_settings(current_context())))})

    @app.route("/api/settings/tax/preview", methods=["POST"], endpoint="settings_tax_preview")
    @login_required
    @json_endpoint
    def settings_tax_preview():
        payload = request.get_json(silent=True) or request.form.to_dict()
        preview = container.settings_service.preview_tax(
            current_context(),
            monthly_gross=payload.get("gross_income"),
            tax_status=payload.get("tax_status") or "",
        )
        return ok({"preview": to_json(preview)})

    @app.route("/api/settings/bpjs/preview", methods=["POST"], endpoint="settings_bpjs_preview")
    @login_required
    @json_endpoint
    def settings_bpjs_preview():
        payload = request.get_json(silent=True) or request.form.to_dict()
        preview = container.settings_service.preview_bpjs(current_context(), salary=payload.get("salary"))
        body = to_json(preview)
        body["employee_total"] = str(preview.employee_total)
        body["company_total"] = str(preview.company_total)
        return ok({"preview": body})

    @app.route("/api/settings/api-keys", methods=["GET"], endpoint="settings_api_keys")
    @login_required
    @json_endpoint
    def settings_api_keys():
        keys = container.api_key_service.list_keys(current_context())
        rows = []
        for k in keys:
            row = to_json(k)
            row["key"] = k.masked_key
            rows.append(row)
        return ok({"api_keys": rows})

    @app.route("/api/settings/api-keys", methods=["POST"], endpoint="settings_create_api_key")
    @login_required
    @json_endpoint
    def settings_create_api_key():
        payload = request.get_json(silent=True) or request.form.to_dict()
        api_key = container.api_key_service.create_key(current_context(), name=payload.get("name") or "")
        # The full key is only ever shown here.
        return ok({"message": "API key berhasil dibuat", "api_key": to_json(api_key)}, 201)

    @app.route("/api/settings/api-keys/<int:api_key_id>/deactivate", methods=["POST"], endpoint="settings_deactivate_api_key")
    @login_required
    @json_endpoint
    def settings_deactivate_api_key(api_key_id: int):
        container.api_key_service.deactivate_key(current_context(), api_key_id)
        return ok({"message": "API key dinonaktifkan"})
