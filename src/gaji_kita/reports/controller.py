from __future__ import annotations

import io
from datetime import date

from flask import Flask, request, send_file

from ..common.datetime_utils import parse_date_field
from ..common.http import current_context, json_endpoint, login_required, ok, to_json
from ..container import Container
from ..core.exceptions import ValidationError
from .export import CSV_MIMETYPE, export_report

PERIOD_REPORTS = {"payroll", "tax", "bpjs"}


def register(app: Flask, container: Container) -> None:
    def _build(kind: str):
        ctx = current_context()
        service = container.report_service
        if kind == "attendance":
            today = date.today()
            return service.attendance_summary(
                ctx,
                year=request.args.get("year", default=today.year, type=int),
                month=request.args.get("month", default=today.month, type=int),
            )
        if kind not in PERIOD_REPORTS:
            raise ValidationError("Jenis laporan tidak dikenal")

        period_start = parse_date_field(request.args.get("period_start"), "Tanggal mulai periode")
        period_end = parse_date_field(request.args.get("period_end"), "Tanggal akhir periode")
        build = {
            "payroll": service.payroll_report,
            "tax": service.tax_report,
            "bpjs": service.bpjs_report,
        }[kind]
        return build(ctx, period_start=period_start, period_end=period_end)

    @app.route("/api/reports/<kind>", methods=["GET"], endpoint="report_view")
    @login_required
    @json_endpoint
    def report_view(kind: str):
        report = _build(kind)
        fmt = (request.args.get("format") or "json").lower()
        if fmt == "json":
            return ok({"report": to_json(report)})

        content, mimetype, filename = export_report(report, fmt)
        if mimetype == CSV_MIMETYPE:
            return app.response_class(
                content,
                mimetype=mimetype,
                headers={"Content-Disposition": f"attachment; filename={filename}"},
            )
        return send_file(io.BytesIO(content), mimetype=mimetype, as_attachment=True, download_name=filename)
