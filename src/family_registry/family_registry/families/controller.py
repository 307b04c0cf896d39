from __future__ import annotations

from functools import wraps

from flask import Flask, flash, redirect, render_template, request, session, url_for
from werkzeug.datastructures import MultiDict

from ..core.constants import AUTHENTICATED_KEY, CLASS_OPTIONS
from ..core.exceptions import FormValidationError, ValidationError
from ..container import Container
from .model import FamilyRecord, Student
from .validation import FamilyForm


def form_from_request(form: MultiDict) -> FamilyForm:
    """Build a FamilyForm from posted fields.

    Siblings arrive as parallel lists (`sibling_name`, `sibling_admission_number`, `sibling_class_name`);
    rows left completely blank are dropped.
    """
    names = form.getlist("sibling_name")
    numbers = form.getlist("sibling_admission_number")
    classes = form.getlist("sibling_class_name")
    count = max(len(names), len(numbers), len(classes))

    def at(values: list[str], i: int) -> str:
        return values[i] if i < len(values) else ""

    siblings = [Student(at(names, i), at(numbers, i), at(classes, i)) for i in range(count)]

    return FamilyForm(
        guardian_nic=form.get("guardian_nic", ""),
        guardian_name=form.get("guardian_name", ""),
        primary_student=Student(
            name=form.get("primary_name", ""),
            admission_number=form.get("primary_admission_number", ""),
            class_name=form.get("primary_class_name", ""),
        ),
        siblings=[s for s in siblings if (s.name + s.admission_number + s.class_name).strip()],
    )


def form_from_family(family: FamilyRecord) -> FamilyForm:
    return FamilyForm(
        guardian_nic=family.guardian_nic,
        guardian_name=family.guardian_name,
        primary_student=family.primary_student,
        siblings=list(family.siblings),
    )


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not session.get(AUTHENTICATED_KEY):
                flash("Please log in to continue!", "warning")
                return redirect(url_for("login"))
            return view(*args, **kwargs)

        return wrapper

    def _render_form(template: str, form: FamilyForm, errors=None, **extra):
        return render_template(
            template,
            form=form,
            errors={str(k): v for k, v in (errors or {}).items()},
            class_options=CLASS_OPTIONS,
            **extra,
        )

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        stats = container.report_service.overview()
        return render_template("dashboard.html", stats=stats, active_page="dashboard")

    @app.route("/families/new", methods=["GET", "POST"], endpoint="new_family")
    @login_required
    def new_family():
        form = FamilyForm(guardian_nic="", guardian_name="", primary_student=Student("", "", ""))
        errors = None

        if request.method == "POST":
            form = form_from_request(request.form)
            try:
                family = container.family_service.register(form)
                flash(f"Family registered with ID {family.id}", "success")
                return redirect(url_for("new_family"))
            except FormValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except Exception:
                app.logger.exception("Registering family failed")
                flash("System error while saving the family", "danger")

        return _render_form("families/form.html", form, errors, active_page="new_family")

    @app.route("/families", methods=["GET"], endpoint="families")
    @login_required
    def families():
        q = request.args.get("q", "")
        rows = container.family_service.search(q)
        return render_template("families/list.html", families=rows, q=q, active_page="families")

    @app.route("/families/view/<path:family_id>", methods=["GET"], endpoint="view_family")
    @login_required
    def view_family(family_id: str):
        try:
            family = container.family_service.get_family(family_id)
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("families"))
        return render_template("families/detail.html", family=family, active_page="families")

    @app.route("/families/edit/<path:family_id>", methods=["GET", "POST"], endpoint="edit_family")
    @login_required
    def edit_family(family_id: str):
        family = container.families_repo.get(family_id)
        if not family:
            flash("Family record not found", "danger")
            return redirect(url_for("families"))

        form = form_from_family(family)
        errors = None

        if request.method == "POST":
            form = form_from_request(request.form)
            try:
                container.family_service.update_family(family_id, form)
                flash("Family updated", "success")
                return redirect(url_for("families"))
            except FormValidationError as e:
                errors = e.errors
                flash(str(e), "danger")
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                app.logger.exception("Updating family %s failed", family_id)
                flash("System error while updating the family", "danger")

        return _render_form("families/form.html", form, errors, family=family, active_page="families")

    @app.route("/families/delete/<path:family_id>", methods=["POST"], endpoint="delete_family")
    @login_required
    def delete_family(family_id: str):
        try:
            container.family_service.delete_family(family_id)
            flash("Family record deleted.", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            app.logger.exception("Deleting family %s failed", family_id)
            flash("System error while deleting the family", "danger")

        return redirect(url_for("families"))
