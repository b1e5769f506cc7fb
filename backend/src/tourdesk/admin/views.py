"""SQLAdmin model and tool views."""

import logging

from sqladmin import BaseView, ModelView, expose
from starlette.requests import Request
from starlette.responses import HTMLResponse

from tourdesk.database import AsyncSessionLocal
from tourdesk.importers import BookingTextParser, ParsedGroup
from tourdesk.models import AppSetting, Booking, DailyAssignment, Group
from tourdesk.services.group_importer import GroupImporter, ImportFailedError

logger = logging.getLogger(__name__)


async def recalculate_group_totals(group_ids: set[str | None]) -> None:
    """Recompute participant totals after a booking changed in the back-office."""
    async with AsyncSessionLocal() as db:
        importer = GroupImporter(db)
        for group_id in group_ids - {None}:
            total = await importer.recalculate_total_participants(group_id)
            logger.info(f"Group {group_id} now has {total} participants")
        await db.commit()


class GroupAdmin(ModelView, model=Group):
    column_list = [
        Group.tour_date,
        Group.meeting_time,
        Group.group_number,
        Group.total_participants,
        Group.status,
        Group.guide_id,
    ]
    column_searchable_list = [Group.guide_id]
    column_sortable_list = [Group.tour_date, Group.meeting_time, Group.group_number]
    column_default_sort = [(Group.tour_date, True)]


class BookingAdmin(ModelView, model=Booking):
    column_list = [
        Booking.booking_reference,
        Booking.customer_name,
        Booking.phone,
        Booking.number_of_people,
        Booking.language,
        Booking.meeting_point,
        Booking.status,
    ]
    column_searchable_list = [Booking.booking_reference, Booking.customer_name]
    column_sortable_list = [Booking.customer_name, Booking.meeting_point]

    async def on_model_change(
        self, data: dict, model: Booking, is_created: bool, request: Request
    ) -> None:
        # Group the booking belonged to before the form was applied
        request.state.previous_group_id = None if is_created else model.group_id

    async def after_model_change(
        self, data: dict, model: Booking, is_created: bool, request: Request
    ) -> None:
        previous = getattr(request.state, "previous_group_id", None)
        await recalculate_group_totals({model.group_id, previous})

    async def on_model_delete(self, model: Booking, request: Request) -> None:
        # The deleted row is expired once committed
        request.state.deleted_group_id = model.group_id

    async def after_model_delete(self, model: Booking, request: Request) -> None:
        await recalculate_group_totals({getattr(request.state, "deleted_group_id", None)})


class DailyAssignmentAdmin(ModelView, model=DailyAssignment):
    column_list = [
        DailyAssignment.assignment_date,
        DailyAssignment.guide_id,
        DailyAssignment.group_number,
    ]
    column_sortable_list = [DailyAssignment.assignment_date, DailyAssignment.group_number]


class AppSettingAdmin(ModelView, model=AppSetting):
    name = "Setting"
    column_list = [AppSetting.key, AppSetting.value, AppSetting.updated_at]
    column_searchable_list = [AppSetting.key]


_IMPORT_TEMPLATE = """\
{% extends "sqladmin/layout.html" %}
{% block content %}
<div class="container-fluid p-4">
  <h2>Bulk Booking Import</h2>
  <form method="post" class="mt-3">
    <textarea name="text" rows="14" class="form-control font-monospace">{{ text }}</textarea>
    <div class="mt-2 d-flex gap-2">
      <button name="action" value="preview" class="btn btn-secondary">Preview</button>
      <button name="action" value="import" class="btn btn-primary">Import</button>
    </div>
  </form>
  {% if error %}
  <div class="alert alert-danger mt-3">{{ error }}</div>
  {% endif %}
  {% if message %}
  <div class="alert alert-success mt-3">{{ message }}</div>
  {% endif %}

  {% if group %}
  <div class="mt-4">
    <h5>
      {{ group.date }} at {{ group.time }} &middot; Group {{ group.group_number }}
      <span class="badge bg-info ms-2">{{ group.bookings|length }} bookings found</span>
      <span class="badge bg-secondary ms-1">{{ group.total_participants }} participants</span>
    </h5>
    <table class="table table-sm table-bordered mt-2">
      <thead><tr><th>Ref</th><th>Name</th><th>Phone</th><th>Email</th><th>Language</th><th class="text-end">People</th><th>Meeting point</th></tr></thead>
      <tbody>
      {% for b in group.bookings %}
        <tr>
          <td>{{ b.booking_reference }}</td>
          <td>{{ b.customer_name }}</td>
          <td>{{ b.phone }}</td>
          <td>{{ b.email }}</td>
          <td>{{ b.language }}</td>
          <td class="text-end">{{ b.number_of_people }}</td>
          <td>{{ b.meeting_point }}</td>
        </tr>
      {% endfor %}
      </tbody>
    </table>
  </div>
  {% endif %}
</div>
{% endblock %}
"""


class ImportToolsView(BaseView):
    name = "Import"
    icon = "fa-file-import"

    @expose("/import", methods=["GET", "POST"])
    async def import_bookings(self, request: Request) -> HTMLResponse:
        text = ""
        group: ParsedGroup | None = None
        message: str | None = None
        error: str | None = None

        if request.method == "POST":
            form = await request.form()
            text = str(form.get("text") or "")
            group = BookingTextParser().parse(text)

            if group is None:
                error = "Could not parse the text. Please check the format."
            elif form.get("action") == "import":
                created_by = request.session.get("username", "admin")
                try:
                    async with AsyncSessionLocal() as db:
                        stored = await GroupImporter(db).import_group(group, created_by=created_by)
                        await db.commit()
                    message = f"Imported {len(group.bookings)} bookings into group {stored.group_number}."
                    text = ""
                except ImportFailedError as e:
                    error = f"Import failed: {e}"

        tmpl = self.templates.env.from_string(_IMPORT_TEMPLATE)
        content = await tmpl.render_async(
            request=request,
            text=text,
            group=group,
            message=message,
            error=error,
        )
        return HTMLResponse(content)
