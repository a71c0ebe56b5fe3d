from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_date_field
from ..common.http import current_context, json_endpoint, login_required, ok, to_json
from ..container import Container
from ..core.enums import CalendarEventType
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/calendar", methods=["GET"], endpoint="calendar_events")
    @login_required
    @json_endpoint
    def calendar_events():
        ctx = current_context()
        if request.args.get("date"):
            day = parse_date_field(request.args.get("date"), "Tanggal")
            events = container.calendar_service.events_on(ctx, day)
        else:
            today = date.today()
            year = request.args.get("year", default=today.year, type=int)
            month = request.args.get("month", default=today.month, type=int)
            if not 1 <= month <= 12:
                raise ValidationError("Bulan tidak valid")
            events = container.calendar_service.events_in_month(ctx, year, month)
        return ok({"events": to_json(list(events))})

    @app.route("/api/calendar", methods=["POST"], endpoint="calendar_add_event")
    @login_required
    @json_endpoint
    def calendar_add_event():
        payload = request.get_json(silent=True) or request.form.to_dict()
        try:
            event_type = CalendarEventType(payload.get("event_type") or CalendarEventType.ATTENDANCE.value)
        except ValueError:
            raise ValidationError("Jenis acara tidak valid")

        container.calendar_service.add_event(
            current_context(),
            on_date=parse_date_field(payload.get("date"), "Tanggal"),
            event_type=event_type,
            title=payload.get("title"),
            description=payload.get("description"),
        )
        return ok({"message": "Acara berhasil ditambahkan"}, 201)

    @app.route("/api/calendar/sync-payroll", methods=["POST"], endpoint="calendar_sync_payroll")
    @login_required
    @json_endpoint
    def calendar_sync_payroll():
        created = container.calendar_service.sync_payroll_periods(current_context())
        return ok({"message": f"{created} acara penggajian ditambahkan", "created": created})
