"""SQLAdmin model views and the statistics dashboard."""

from sqladmin import BaseView, ModelView, expose
from starlette.requests import Request
from starlette.responses import HTMLResponse

from cinecatalog.database import AsyncSessionLocal
from cinecatalog.models.director import Director
from cinecatalog.models.genre import Genre
from cinecatalog.models.media import Media
from cinecatalog.models.media_type import MediaType
from cinecatalog.models.producer import Producer
from cinecatalog.models.user import User
from cinecatalog.services import statistics


class GenreAdmin(ModelView, model=Genre):
    column_list = [Genre.id, Genre.name, Genre.tags, Genre.is_active, Genre.created_by]
    column_searchable_list = [Genre.name]
    column_sortable_list = [Genre.name, Genre.created_at]
    column_default_sort = [(Genre.name, False)]
    # Deactivation goes through the API, which refuses it while media reference the row
    form_excluded_columns = [Genre.is_active, Genre.created_at, Genre.updated_at]
    can_delete = False


class DirectorAdmin(ModelView, model=Director):
    column_list = [
        Director.id,
        Director.name,
        Director.nationality,
        Director.birth_date,
        Director.is_active,
    ]
    column_searchable_list = [Director.name, Director.nationality]
    column_sortable_list = [Director.name, Director.nationality, Director.birth_date]
    form_excluded_columns = [Director.is_active, Director.created_at, Director.updated_at]
    can_delete = False


class ProducerAdmin(ModelView, model=Producer):
    column_list = [
        Producer.id,
        Producer.name,
        Producer.country,
        Producer.founded_year,
        Producer.specialties,
        Producer.is_active,
    ]
    column_searchable_list = [Producer.name, Producer.country]
    column_sortable_list = [Producer.name, Producer.country, Producer.founded_year]
    form_excluded_columns = [Producer.is_active, Producer.created_at, Producer.updated_at]
    can_delete = False


class MediaTypeAdmin(ModelView, model=MediaType):
    name = "Type"
    name_plural = "Types"
    column_list = [
        MediaType.id,
        MediaType.name,
        MediaType.category,
        MediaType.format,
        MediaType.platforms,
        MediaType.is_active,
    ]
    column_searchable_list = [MediaType.name, MediaType.category]
    column_sortable_list = [MediaType.name, MediaType.category]
    form_excluded_columns = [MediaType.is_active, MediaType.created_at, MediaType.updated_at]
    can_delete = False


class MediaAdmin(ModelView, model=Media):
    name = "Media"
    name_plural = "Media"
    column_list = [
        Media.id,
        Media.title,
        Media.release_date,
        Media.duration,
        Media.average_rating,
        Media.media_type,
        Media.director,
        Media.is_active,
    ]
    column_searchable_list = [Media.title]
    column_sortable_list = [Media.title, Media.release_date, Media.average_rating]
    column_default_sort = [(Media.release_date, True)]
    can_delete = False


class UserAdmin(ModelView, model=User):
    column_list = [User.id, User.email, User.first_name, User.last_name, User.role, User.is_active]
    column_searchable_list = [User.email, User.last_name]
    column_sortable_list = [User.email, User.role, User.created_at]
    column_details_exclude_list = [User.password_hash, User.refresh_token]
    form_excluded_columns = [User.password_hash, User.refresh_token, User.created_at, User.updated_at]
    can_create = False
    can_delete = False


_STATS_TEMPLATE = """\
{% extends "sqladmin/layout.html" %}
{% block content %}
<div class="container-fluid p-4">
  <h2>Catalog Statistics</h2>
  <table class="table table-sm table-bordered mt-3" style="max-width:520px">
    <thead><tr><th>Resource</th><th class="text-end">Active</th><th class="text-end">Inactive</th></tr></thead>
    <tbody>
    {% for row in counts %}
      <tr>
        <td>{{ row.label }}</td>
        <td class="text-end">{{ row.active }}</td>
        <td class="text-end">{{ row.inactive }}</td>
      </tr>
    {% endfor %}
    </tbody>
  </table>

  <h4 class="mt-4">Top directors</h4>
  <ul>
  {% for d in media.topDirectors %}
    <li>{{ d.name }} ({{ d.count }})</li>
  {% else %}
    <li>No media yet</li>
  {% endfor %}
  </ul>

  {% if media.ratingStats %}
  <p>Average rating: {{ media.ratingStats.averageRating }} over {{ media.ratingStats.totalRated }} rated titles</p>
  {% endif %}
</div>
{% endblock %}
"""


class CatalogStatsView(BaseView):
    name = "Statistics"
    icon = "fa-chart-bar"

    @expose("/stats", methods=["GET"])
    async def stats(self, request: Request) -> HTMLResponse:
        async with AsyncSessionLocal() as session:
            counts = []
            for label, model in [
                ("Genres", Genre),
                ("Directors", Director),
                ("Producers", Producer),
                ("Types", MediaType),
                ("Media", Media),
            ]:
                _, active, inactive = await statistics.status_counts(session, model)
                counts.append({"label": label, "active": active, "inactive": inactive})
            media = await statistics.media_stats(session)

        tmpl = self.templates.env.from_string(_STATS_TEMPLATE)
        content = await tmpl.render_async(request=request, counts=counts, media=media)
        return HTMLResponse(content)
