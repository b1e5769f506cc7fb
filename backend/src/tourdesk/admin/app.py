"""Admin FastAPI application."""

from fastapi import FastAPI
from sqladmin import Admin

from tourdesk.admin.auth import AdminAuth
from tourdesk.admin.views import (
    AppSettingAdmin,
    BookingAdmin,
    DailyAssignmentAdmin,
    GroupAdmin,
    ImportToolsView,
)
from tourdesk.config import settings
from tourdesk.database import engine


def create_admin_app() -> FastAPI:
    app = FastAPI(title="TourDesk Admin")
    auth = AdminAuth(secret_key=settings.admin_secret_key)
    admin = Admin(app, engine, authentication_backend=auth, title="TourDesk Admin")
    for view in [GroupAdmin, BookingAdmin, DailyAssignmentAdmin, AppSettingAdmin, ImportToolsView]:
        admin.add_view(view)
    return app


admin_app = create_admin_app()
