from __future__ import annotations

from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..core.constants import AUTHENTICATED_KEY
from ..core.enums import ExportFormat, ImportStatus
from ..core.exceptions import ImportFormatError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not session.get(AUTHENTICATED_KEY):
                flash("Please log in to continue!", "warning")
                return redirect(url_for("login"))
            return view(*args, **kwargs)

        return wrapper

    def _download(content: str, *, fmt: ExportFormat, mimetype: str):
        filename = container.transfer_service.export_filename(fmt)
        return app.response_class(
            content.encode("utf-8-sig" if fmt == ExportFormat.CSV else "utf-8"),
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _run_import(payload: str, *, confirmed: bool):
        svc = container.transfer_service
        try:
            plan = svc.prepare_import(payload)
            result = svc.apply_import(plan, confirmed=confirmed)
        except ImportFormatError as e:
            flash(str(e), "danger")
            return redirect(url_for("families"))
        except Exception:
            app.logger.exception("Import failed")
            flash("Error importing family data. Please check the file format.", "danger")
            return redirect(url_for("families"))

        if result.status == ImportStatus.NEEDS_CONFIRMATION:
            return render_template(
                "families/import_confirm.html",
                payload=payload,
                summary=plan.duplicate_summary(),
                importable=len(plan.clean),
                active_page="families",
            )

        flash(result.message, "success" if result.status == ImportStatus.IMPORTED else "warning")
        return redirect(url_for("families"))

    @app.route("/families/export.csv", methods=["GET"], endpoint="export_csv")
    @login_required
    def export_csv():
        return _download(container.transfer_service.export_csv(), fmt=ExportFormat.CSV, mimetype="text/csv")

    @app.route("/families/export.json", methods=["GET"], endpoint="export_json")
    @login_required
    def export_json():
        return _download(
            container.transfer_service.export_json(), fmt=ExportFormat.JSON, mimetype="application/json"
        )

    @app.route("/families/import", methods=["POST"], endpoint="import_families")
    @login_required
    def import_families():
        file = request.files.get("file")
        if not file or not file.filename:
            flash("No file selected", "warning")
            return redirect(url_for("families"))

        try:
            payload = file.read().decode("utf-8-sig")
        except UnicodeDecodeError:
            flash("Error parsing JSON file. Please ensure it contains valid JSON data.", "danger")
            return redirect(url_for("families"))

        return _run_import(payload, confirmed=False)

    @app.route("/families/import/confirm", methods=["POST"], endpoint="confirm_import")
    @login_required
    def confirm_import():
        return _run_import(request.form.get("payload", ""), confirmed=True)
