"""Flask web application for the vehicle maintenance logbook."""

from datetime import date, datetime

from flask import Flask, Response, flash, redirect, render_template, request, url_for

from maintlog.coerce import parse_cost, parse_mileage
from maintlog.config import Settings, configure_logging
from maintlog.errors import PersistenceError, ValidationError
from maintlog.export import (
    csv_filename,
    email_issues,
    issues_csv,
    issues_report,
    mailto_link,
)
from maintlog.issue import Priority
from maintlog.logbook import Logbook
from maintlog.service_type import ServiceType
from maintlog.status import Status

settings = Settings.from_env()
configure_logging(settings.log_level)

app = Flask(__name__)
app.secret_key = settings.secret_key
app.config["DATA_FILE"] = settings.data_file


def get_logbook() -> Logbook:
    """Load the logbook fresh for each request."""
    return Logbook.open(app.config["DATA_FILE"])


def format_miles(miles):
    """Format miles with comma separator."""
    if miles is None:
        return "—"
    return f"{miles:,}"


def format_date(value):
    """Format a date or timestamp for display."""
    if value is None:
        return "—"
    if isinstance(value, datetime):
        return value.date().isoformat()
    return value.isoformat()


def status_color(status: Status) -> str:
    """Get Tailwind color classes for status."""
    colors = {
        Status.OVERDUE: "bg-red-100 text-red-800 border-red-200",
        Status.DUE_SOON: "bg-yellow-100 text-yellow-800 border-yellow-200",
        Status.OK: "bg-green-100 text-green-800 border-green-200",
        Status.UNKNOWN: "bg-purple-100 text-purple-800 border-purple-200",
    }
    return colors.get(status, "bg-gray-100 text-gray-800")


def priority_color(priority: Priority) -> str:
    """Get Tailwind color classes for issue priority."""
    colors = {
        Priority.LOW: "bg-gray-400 text-white",
        Priority.MEDIUM: "bg-blue-500 text-white",
        Priority.HIGH: "bg-orange-500 text-white",
        Priority.CRITICAL: "bg-red-600 text-white",
    }
    return colors.get(priority, "bg-gray-500 text-white")


# Register template filters
app.jinja_env.filters["format_miles"] = format_miles
app.jinja_env.filters["format_date"] = format_date
app.jinja_env.filters["status_color"] = status_color
app.jinja_env.filters["priority_color"] = priority_color


def run_mutation(action, success_message: str):
    """Apply a change, flashing the outcome. Returns True on success."""
    try:
        result = action()
    except ValidationError as e:
        flash(f"Please fill in all required fields ({e.field})", "error")
        return False
    except PersistenceError as e:
        flash(f"Change applied but not saved: {e}", "error")
        return False
    if result is None or result is False:
        flash("Not found", "error")
        return False
    flash(success_message, "success")
    return True


@app.route("/")
def index():
    """Dashboard: vehicle info, service schedule, maintenance log, issues."""
    book = get_logbook()
    filter_type = request.args.get("type", "all")
    if filter_type != "all" and filter_type not in {t.value for t in ServiceType}:
        filter_type = "all"
    view = book.view(filter_type)

    return render_template(
        "index.html",
        view=view,
        last_saved=book.store.last_saved,
        last_service=book.store.last_service,
        total_cost=book.store.total_cost,
        service_types=list(ServiceType),
        priorities=list(Priority),
        today=date.today().isoformat(),
    )


@app.route("/vehicle", methods=["POST"])
def update_vehicle():
    """Handle vehicle info form submission."""
    book = get_logbook()
    vin = request.form.get("vin", "")
    mileage = parse_mileage(request.form.get("mileage"))
    run_mutation(
        lambda: book.update_vehicle_info(vin=vin, mileage=mileage),
        "Vehicle information saved successfully!",
    )
    return redirect(url_for("index"))


@app.route("/maintenance", methods=["POST"])
def add_maintenance():
    """Handle maintenance form submission."""
    book = get_logbook()
    mileage = parse_mileage(request.form.get("mileage"))
    if not mileage:
        flash("Please fill in all required fields (mileage)", "error")
        return redirect(url_for("index"))

    run_mutation(
        lambda: book.add_maintenance(
            request.form.get("date"),
            request.form.get("type"),
            mileage,
            request.form.get("notes", ""),
            parse_cost(request.form.get("cost")),
        ),
        "Maintenance record added successfully!",
    )
    return redirect(url_for("index"))


@app.route("/maintenance/<record_id>/delete", methods=["POST"])
def delete_maintenance(record_id: str):
    book = get_logbook()
    run_mutation(lambda: book.delete_maintenance(record_id), "Maintenance record deleted")
    return redirect(url_for("index", type=request.args.get("type", "all")))


@app.route("/issues", methods=["POST"])
def add_issue():
    """Handle issue form submission."""
    book = get_logbook()
    run_mutation(
        lambda: book.add_issue(
            request.form.get("date"),
            request.form.get("description"),
            request.form.get("priority") or Priority.MEDIUM,
        ),
        "Issue added successfully!",
    )
    return redirect(url_for("index"))


@app.route("/issues/<issue_id>/toggle", methods=["POST"])
def toggle_issue(issue_id: str):
    book = get_logbook()
    run_mutation(lambda: book.toggle_issue(issue_id), "Issue updated")
    return redirect(url_for("index"))


@app.route("/issues/<issue_id>/edit", methods=["POST"])
def edit_issue(issue_id: str):
    book = get_logbook()
    run_mutation(
        lambda: book.edit_issue(
            issue_id,
            request.form.get("date"),
            request.form.get("description"),
            request.form.get("priority"),
        ),
        "Issue updated successfully!",
    )
    return redirect(url_for("index"))


@app.route("/issues/<issue_id>/delete", methods=["POST"])
def delete_issue(issue_id: str):
    book = get_logbook()
    run_mutation(lambda: book.delete_issue(issue_id), "Issue deleted")
    return redirect(url_for("index"))


@app.route("/issues/report")
def issues_report_page():
    """Printable issues report."""
    book = get_logbook()
    report = issues_report(book.store, datetime.now())
    return render_template("report.html", title=f"{book.store.vehicle_info.name} Issues Report", report=report)


@app.route("/issues/email")
def issues_email():
    """Open the default mail client with the active issues."""
    book = get_logbook()
    subject, body = email_issues(book.store, datetime.now())
    return redirect(mailto_link(subject, body))


@app.route("/issues/export.csv")
def issues_export_csv():
    book = get_logbook()
    return Response(
        issues_csv(book.store.issues),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={csv_filename(date.today())}"},
    )


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
