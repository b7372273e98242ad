"""
app.py: Flask front-end for the release catalog.

Pages and action endpoints drive a single CatalogController; data-source and
theme preferences live in a ConfigStore that is saved after every change.
"""

from flask import Flask, flash, jsonify, redirect, render_template_string, request, url_for

import config
from catalog import templates
from catalog.controller import IDLE, CatalogController
from catalog.errors import CatalogError
from catalog.mapper import STATUS_OPTIONS, Attachment, ReleaseForm
from catalog.store import ConfigStore
from core import logger as logging_utils

log = logging_utils.get_logger()

# These replace the catalog with a remediation screen instead of a notification.
BLOCKING_ERRORS = ("permission", "configuration")


def form_from_request(req) -> ReleaseForm:
    def attachment(name):
        upload = req.files.get(name)
        if upload is None or not upload.filename:
            return None
        return Attachment(
            filename=upload.filename,
            mime_type=upload.mimetype or "application/octet-stream",
            content=upload.read(),
        )

    data = req.form
    return ReleaseForm(
        title=data.get("title", "").strip(),
        artist=data.get("artist", "").strip(),
        status=data.get("status", "Upload"),
        upc_code=data.get("upc_code", "").strip(),
        isrc_code=data.get("isrc_code", "").strip(),
        release_date=data.get("release_date", "").strip(),
        release_id=data.get("release_id", "").strip(),
        existing_artwork_url=data.get("existing_artwork_url", ""),
        existing_audio_url=data.get("existing_audio_url", ""),
        artwork_file=attachment("artwork_file"),
        audio_file=attachment("audio_file"),
    )


def create_app(store=None, controller=None):
    app = Flask(__name__)
    app.secret_key = config.FLASK_SECRET_KEY

    store = store or ConfigStore().load()
    controller = controller or CatalogController()
    app.config["CATALOG_STORE"] = store
    app.config["CATALOG_CONTROLLER"] = controller

    def ensure_loaded():
        # Errored snapshots are not retried here; the user asks via /refresh.
        active = store.active
        if controller.status == IDLE or controller.source is None or (
            active is not None and controller.source.config_id != active.config_id
        ):
            controller.fetch(active)

    def render(content_template, **context):
        state = controller.state
        common = dict(
            source=store.active,
            sources=store.sources,
            theme=store.theme,
            suggested_name=store.suggest_display_name(),
            state=state,
            last_updated=logging_utils.format_date(state.last_updated) if state.last_updated else "",
        )
        common.update(context)
        content = render_template_string(content_template, **common)
        return render_template_string(templates.LAYOUT, content=content, **common)

    def report(result, success_message=None):
        if result.success:
            flash(success_message or result.message, "success")
        elif not (
            result.error_kind in BLOCKING_ERRORS
            and controller.state.error_kind == result.error_kind
        ):
            flash(result.message, "error")

    def blocking_screen():
        state = controller.state
        if state.error_kind == "permission":
            email = getattr(controller.last_error, "service_account_email", None)
            return render(templates.PERMISSION_REQUIRED, service_account_email=email)
        if state.error_kind == "configuration":
            return render(templates.CONFIGURATION_REQUIRED)
        return None

    @app.route("/")
    def index():
        ensure_loaded()
        screen = blocking_screen()
        if screen is not None:
            return screen
        query = request.args.get("q", "")
        return render(templates.CATALOG, releases=controller.search(query), query=query)

    @app.route("/refresh", methods=["POST"])
    def refresh():
        result = controller.fetch(store.active)
        if not result.success:
            report(result)
        return redirect(url_for("index"))

    @app.route("/api/releases")
    def api_releases():
        ensure_loaded()
        state = controller.state
        return jsonify(
            {
                "success": state.error is None,
                "status": controller.status,
                "error": state.error,
                "errorKind": state.error_kind,
                "releases": [r.to_dict() for r in controller.search(request.args.get("q", ""))],
            }
        )

    @app.route("/api/releases/<card_key>")
    def api_release(card_key):
        ensure_loaded()
        try:
            record = controller.record_for(card_key)
        except CatalogError as e:
            return jsonify({"success": False, "error": str(e), "errorKind": e.kind}), 404
        return jsonify({"success": True, "release": record.to_dict()})

    @app.route("/api/sources")
    def api_sources():
        return jsonify(store.as_dict())

    @app.route("/releases/new")
    def new_release():
        ensure_loaded()
        return render(
            templates.RELEASE_FORM,
            form=controller.new_form(),
            card_key=None,
            status_options=STATUS_OPTIONS,
        )

    @app.route("/releases/<card_key>")
    def release_detail(card_key):
        ensure_loaded()
        try:
            record = controller.record_for(card_key)
        except CatalogError as e:
            flash(str(e), "error")
            return redirect(url_for("index"))
        return render(templates.DETAIL, release=record)

    @app.route("/releases/<card_key>/edit")
    def edit_release(card_key):
        ensure_loaded()
        try:
            form = controller.form_for(card_key)
        except CatalogError as e:
            flash(str(e), "error")
            return redirect(url_for("index"))
        return render(
            templates.RELEASE_FORM, form=form, card_key=card_key, status_options=STATUS_OPTIONS
        )

    @app.route("/releases", methods=["POST"])
    def create_release():
        ensure_loaded()
        result = controller.submit(form_from_request(request))
        report(result)
        if not result.success and result.error_kind == "validation":
            return redirect(url_for("new_release"))
        return redirect(url_for("index"))

    @app.route("/releases/<card_key>/edit", methods=["POST"])
    def update_release(card_key):
        ensure_loaded()
        result = controller.submit(form_from_request(request), card_key=card_key)
        report(result)
        if not result.success and result.error_kind == "validation":
            return redirect(url_for("edit_release", card_key=card_key))
        return redirect(url_for("index"))

    @app.route("/releases/<card_key>/delete", methods=["POST"])
    def delete_release(card_key):
        ensure_loaded()
        result = controller.delete(card_key=card_key)
        report(result)
        return redirect(url_for("index"))

    @app.route("/sources", methods=["POST"])
    def add_source():
        try:
            source = store.add_source(
                request.form.get("display_name", ""),
                request.form.get("spreadsheet_id", ""),
                request.form.get("sheet_name", ""),
            )
        except CatalogError as e:
            flash(str(e), "error")
            return redirect(url_for("index"))
        store.save()
        flash(f'Data source "{source.display_name}" added.', "success")
        result = controller.fetch(source)
        if not result.success:
            report(result)
        return redirect(url_for("index"))

    @app.route("/sources/<config_id>/activate", methods=["POST"])
    def activate_source(config_id):
        try:
            source = store.set_active(config_id)
        except CatalogError as e:
            flash(str(e), "error")
            return redirect(url_for("index"))
        store.save()
        result = controller.fetch(source)
        if not result.success:
            report(result)
        return redirect(url_for("index"))

    @app.route("/sources/<config_id>/delete", methods=["POST"])
    def delete_source(config_id):
        previous = store.active_id
        try:
            source = store.delete_source(config_id)
        except CatalogError as e:
            flash(str(e), "error")
            return redirect(url_for("index"))
        store.save()
        flash(f'Data source "{source.display_name}" removed.', "success")
        if store.active_id != previous:
            controller.fetch(store.active)
        return redirect(url_for("index"))

    @app.route("/theme", methods=["POST"])
    def toggle_theme():
        store.toggle_theme()
        store.save()
        return redirect(request.referrer or url_for("index"))

    return app


if __name__ == "__main__":
    create_app().run(host=config.FLASK_HOST, port=config.FLASK_PORT, debug=config.FLASK_DEBUG)
