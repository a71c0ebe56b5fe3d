from __future__ import annotations

from flask import Flask, request

from ..common.http import current_context, json_endpoint, login_required, ok, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    @json_endpoint
    def list_employees():
        employees = container.employee_service.list_employees(
            current_context(),
            search=request.args.get("q") or None,
            active_only=request.args.get("active") == "1",
        )
        rows = []
        for e in employees:
            row = to_json(e)
            row["full_name"] = e.full_name
            rows.append(row)
        return ok({"employees": rows})

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    @json_endpoint
    def get_employee(employee_id: int):
        employee = container.employee_service.get_employee(current_context(), employee_id)
        return ok({"employee": to_json(employee)})

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @login_required
    @json_endpoint
    def create_employee():
        payload = request.get_json(silent=True) or request.form.to_dict()
        employee_id = container.employee_service.create_employee(current_context(), payload)
        return ok({"message": "Karyawan berhasil ditambahkan", "employee_id": employee_id}, 201)

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    @login_required
    @json_endpoint
    def update_employee(employee_id: int):
        payload = request.get_json(silent=True) or request.form.to_dict()
        container.employee_service.update_employee(current_context(), employee_id, payload)
        return ok({"message": "Data karyawan berhasil diperbarui"})

    @app.route("/api/employees/<int:employee_id>/deactivate", methods=["POST"], endpoint="deactivate_employee")
    @login_required
    @json_endpoint
    def deactivate_employee(employee_id: int):
        container.employee_service.deactivate_employee(current_context(), employee_id)
        return ok({"message": "Karyawan dinonaktifkan"})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @login_required
    @json_endpoint
    def delete_employee(employee_id: int):
        container.employee_service.delete_employee(current_context(), employee_id)
        return ok({"message": "Karyawan berhasil dihapus"})

    @app.route("/api/departments", methods=["GET"], endpoint="list_departments")
    @login_required
    @json_endpoint
    def list_departments():
        departments = container.department_service.list_departments(current_context())
        return ok({"departments": to_json(list(departments))})

    @app.route("/api/departments", methods=["POST"], endpoint="create_department")
    @login_required
    @json_endpoint
    def create_department():
        payload = request.get_json(silent=True) or request.form.to_dict()
        department_id = container.department_service.create_department(
            current_context(), name=payload.get("name") or "", description=payload.get("description")
        )
        return ok({"message": "Departemen berhasil ditambahkan", "department_id": department_id}, 201)

    @app.route("/api/departments/<int:department_id>", methods=["PUT"], endpoint="update_department")
    @login_required
    @json_endpoint
    def update_department(department_id: int):
        payload = request.get_json(silent=True) or request.form.to_dict()
        container.department_service.update_department(
            current_context(), department_id, name=payload.get("name") or "", description=payload.get("description")
        )
        return ok({"message": "Departemen berhasil diperbarui"})

    @app.route("/api/departments/<int:department_id>", methods=["DELETE"], endpoint="delete_department")
    @login_required
    @json_endpoint
    def delete_department(department_id: int):
        container.department_service.delete_department(current_context(), department_id)
        return ok({"message": "Departemen berhasil dihapus"})

    @app.route("/api/positions", methods=["GET"], endpoint="list_positions")
    @login_required
    @json_endpoint
    def list_positions():
        department_id = request.args.get("department_id", type=int)
        positions = container.position_service.list_positions(current_context(), department_id=department_id)
        return ok({"positions": to_json(list(positions))})

    @app.route("/api/positions", methods=["POST"], endpoint="create_position")
    @login_required
    @json_endpoint
    def create_position():
        payload = request.get_json(silent=True) or request.form.to_dict()
        position_id = container.position_service.create_position(current_context(), payload)
        return ok({"message": "Jabatan berhasil ditambahkan", "position_id": position_id}, 201)

    @app.route("/api/positions/<int:position_id>", methods=["PUT"], endpoint="update_position")
    @login_required
    @json_endpoint
    def update_position(position_id: int):
        payload = request.get_json(silent=True) or request.form.to_dict()
        container.position_service.update_position(current_context(), position_id, payload)
        return ok({"message": "Jabatan berhasil diperbarui"})

    @app.route("/api/positions/<int:position_id>", methods=["DELETE"], endpoint="delete_position")
    @login_required
    @json_endpoint
    def delete_position(position_id: int):
        container.position_service.delete_position(current_context(), position_id)
        return ok({"message": "Jabatan berhasil dihapus"})
