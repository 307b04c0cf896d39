from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..core.constants import AUTHENTICATED_KEY
from ..core.exceptions import AuthenticationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals["csrf_token"] = lambda: ""

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if session.get(AUTHENTICATED_KEY):
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")

            try:
                container.auth_service.authenticate(username, password)
                session.clear()
                session[AUTHENTICATED_KEY] = True
                flash("Logged in successfully", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                app.logger.exception("Login failed")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while logging in: {e}", "danger")
                else:
                    flash("System error while logging in", "danger")

        return render_template("login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.pop(AUTHENTICATED_KEY, None)
        flash("Logged out.", "info")
        return redirect(url_for("login"))
