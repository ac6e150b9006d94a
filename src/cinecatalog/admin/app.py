"""Back-office (SQLAdmin) setup."""

from fastapi import FastAPI
from sqladmin import Admin

from cinecatalog.admin.auth import AdminAuth
from cinecatalog.admin.views import (
    CatalogStatsView,
    DirectorAdmin,
    GenreAdmin,
    MediaAdmin,
    MediaTypeAdmin,
    ProducerAdmin,
    UserAdmin,
)
from cinecatalog.config import settings
from cinecatalog.database import engine


def setup_admin(app: FastAPI) -> Admin:
    """Mount the back-office on ``app`` under /admin."""
    auth = AdminAuth(secret_key=settings.admin_secret_key)
    admin = Admin(app, engine, authentication_backend=auth, title="CineCatalog Admin")
    for view in [
        MediaAdmin,
        GenreAdmin,
        DirectorAdmin,
        ProducerAdmin,
        MediaTypeAdmin,
        UserAdmin,
        CatalogStatsView,
    ]:
        admin.add_view(view)
    return admin
