from __future__ import annotations

from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..core.constants import AUTHENTICATED_KEY, CLASS_OPTIONS
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

    @app.route("/reports/classes", methods=["GET"], endpoint="class_report")
    @login_required
    def class_report():
        q = request.args.get("q", "")
        return render_template(
            "reports/classes.html",
            classes=container.report_service.class_summary(q),
            totals=container.report_service.class_totals(),
            q=q,
            active_page="class_report",
        )

    @app.route("/reports/classes/<class_name>", methods=["GET"], endpoint="class_detail")
    @login_required
    def class_detail(class_name: str):
        if class_name not in CLASS_OPTIONS:
            flash("Unknown class", "warning")
            return redirect(url_for("class_report"))

        students = container.report_service.students_in_class(class_name)
        return render_template(
            "reports/class_detail.html",
            class_name=class_name,
            students=students,
            active_page="class_report",
        )
