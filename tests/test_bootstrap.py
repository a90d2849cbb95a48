# =============================================================================
# tests/test_bootstrap.py - bootstrap() Integration Tests
# =============================================================================
# Configuration errors and the served application, driven by the fixture
# apps under tests/apps.
#
# Run with: pytest tests/test_bootstrap.py -v
# =============================================================================

import json
import os

import pytest

from formflow import (
    BaseController,
    MissingRoutesError,
    MissingStepsError,
    PathNotFoundError,
    bootstrap,
)
from formflow.application import FormApp
from formflow.exceptions import InvalidConfigError

from .conftest import APP_1_VIEWS, COOKIE_HEADER, TESTS_DIR

INVALID_PATH = os.path.join(TESTS_DIR, "not_a_valid_path")


# =============================================================================
# Configuration Errors
# =============================================================================

class TestConfigurationErrors:
    """Errors raised before any application is built."""

    def test_must_be_given_a_list_of_routes(self):
        with pytest.raises(MissingRoutesError, match="Must be called with a list of routes"):
            bootstrap()

    def test_empty_route_list_is_rejected(self):
        with pytest.raises(MissingRoutesError):
            bootstrap(routes=[])

    def test_routes_must_each_have_steps(self):
        with pytest.raises(MissingStepsError) as exc_info:
            bootstrap(routes=[{}])

        assert str(exc_info.value) == "Each route must define a set of one or more steps"

    def test_second_route_without_steps_is_reported(self):
        with pytest.raises(MissingStepsError) as exc_info:
            bootstrap(routes=[{"steps": {}}, {"views": "views"}])

        assert exc_info.value.details == {"route_index": 1}

    def test_requires_valid_fields_path(self):
        with pytest.raises(PathNotFoundError) as exc_info:
            bootstrap(fields="not_a_valid_path", routes=[{"steps": {}}])

        assert str(exc_info.value) == f"Cannot find fields at {INVALID_PATH}"

    def test_requires_valid_route_fields_path(self):
        with pytest.raises(PathNotFoundError) as exc_info:
            bootstrap(fields="", routes=[{"steps": {}, "fields": "not_a_valid_path"}])

        assert str(exc_info.value) == f"Cannot find route fields at {INVALID_PATH}"

    def test_requires_valid_views_path(self):
        with pytest.raises(PathNotFoundError) as exc_info:
            bootstrap(views="not_a_valid_path", routes=[{"steps": {}}])

        assert str(exc_info.value) == f"Cannot find views at {INVALID_PATH}"

    def test_requires_valid_route_views_path(self):
        with pytest.raises(PathNotFoundError) as exc_info:
            bootstrap(routes=[{"steps": {}, "views": "not_a_valid_path"}])

        assert str(exc_info.value) == f"Cannot find route views at {INVALID_PATH}"
        assert exc_info.value.kind == "route views"
        assert exc_info.value.path == INVALID_PATH

    def test_relative_paths_resolve_against_explicit_caller(self, tmp_path):
        with pytest.raises(PathNotFoundError) as exc_info:
            bootstrap(caller=str(tmp_path), routes=[{"steps": {}}])

        assert str(exc_info.value) == f"Cannot find fields at {tmp_path / 'fields'}"

    def test_invalid_params_pattern_is_rejected(self):
        with pytest.raises(InvalidConfigError, match="Invalid route param segment"):
            bootstrap(views=False, routes=[{"steps": {"/one": {}}, "params": "/action"}])

    def test_wrong_option_type_is_rejected(self):
        with pytest.raises(InvalidConfigError):
            bootstrap(views=False, port="not-a-port", routes=[{"steps": {}}])

    def test_none_path_keeps_the_default_directory(self, tmp_path):
        with pytest.raises(PathNotFoundError) as exc_info:
            bootstrap(caller=str(tmp_path), fields=False, views=None, routes=[{"steps": {}}])

        assert str(exc_info.value) == f"Cannot find views at {tmp_path / 'views'}"

    def test_malformed_fields_file_names_the_file(self, tmp_path):
        fields_file = tmp_path / "fields.json"
        fields_file.write_text("{not json")

        with pytest.raises(InvalidConfigError) as exc_info:
            bootstrap(caller=str(tmp_path), fields="fields.json", views=False, routes=[{"steps": {}}])

        assert str(fields_file) in str(exc_info.value)
        assert "not valid JSON" in str(exc_info.value)

    def test_fields_file_must_be_an_object(self, tmp_path):
        (tmp_path / "fields.json").write_text("[]")

        with pytest.raises(InvalidConfigError, match="must map field names"):
            bootstrap(caller=str(tmp_path), fields="fields.json", views=False, routes=[{"steps": {}}])

    @pytest.mark.parametrize(
        "definition, message",
        [
            ({"mixin": 3}, "mixin"),
            ({"validate": ["requried"]}, "Unknown validator 'requried'"),
            ({"validate": ["minlength:abc"]}, "minlength needs a whole number"),
            ({"validate": "maxlength"}, "maxlength needs a whole number"),
            ({"validate": ["regex:["]}, "Invalid regex"),
        ],
    )
    def test_bad_field_definition_is_rejected(self, tmp_path, definition, message):
        route_fields = tmp_path / "route_fields"
        route_fields.mkdir()
        (route_fields / "index.json").write_text(json.dumps({"name": definition}))

        with pytest.raises(InvalidConfigError) as exc_info:
            bootstrap(
                caller=str(tmp_path),
                fields=False,
                views=False,
                routes=[{"steps": {"/name": {"fields": ["name"]}}, "fields": "route_fields"}],
            )

        assert message in str(exc_info.value)
        assert str(route_fields / "index.json") in str(exc_info.value)
        assert 'field "name"' in str(exc_info.value)


# =============================================================================
# Valid Configuration
# =============================================================================

class TestValidRoutes:
    """Serving the declared steps."""

    def test_returns_the_app(self, app_1_route):
        app = bootstrap(views=False, routes=[app_1_route])

        assert isinstance(app, FormApp)
        assert callable(app.listen)
        assert callable(app.use)

    def test_responds_successfully_to_get_requests(self, app_1_route, make_client):
        app = bootstrap(views=False, routes=[app_1_route])

        response = make_client(app).get("/one")

        assert response.status_code == 200

    def test_serves_the_correct_view_for_each_step(self, app_1_route, make_client):
        app = bootstrap(views=False, routes=[app_1_route])

        response = make_client(app).get("/one", headers=COOKIE_HEADER)

        assert response.status_code == 200
        assert response.text == "<div>one</div>\n"

    def test_responds_404_when_not_found(self, app_1_route, make_client):
        app = bootstrap(views=False, routes=[app_1_route])

        response = make_client(app).get("/not_here")

        assert response.status_code == 404

    def test_uses_route_base_url(self, app_1_route, make_client):
        app_1_route["baseUrl"] = "/app_1"
        app = bootstrap(views=False, routes=[app_1_route])
        client = make_client(app)

        response = client.get("/app_1/one")

        assert response.status_code == 200
        assert response.text == "<div>one</div>\n"
        assert client.get("/one").status_code == 404

    def test_can_be_given_a_route_param(self, app_1_route, make_client):
        app_1_route["params"] = "/:action?"
        app = bootstrap(views=False, routes=[app_1_route])
        client = make_client(app)

        assert client.get("/one/param").text == "<div>one</div>\n"
        assert client.get("/one").text == "<div>one</div>\n"
        assert client.get("/one/param/extra").status_code == 404

    def test_accepts_a_base_controller_option(self, make_client):
        app = bootstrap(
            baseController=BaseController,
            views=APP_1_VIEWS,
            routes=[{"steps": {"/one": {}}}],
        )

        response = make_client(app).get("/one")

        assert response.status_code == 200
        assert response.text == "<div>one</div>\n"

    def test_route_views_take_precedence_over_global_views(self, app_1_route, make_client):
        app = bootstrap(routes=[app_1_route, {"baseUrl": "/other", "steps": {"/one": {}}}])
        client = make_client(app)

        assert client.get("/one").text == "<div>one</div>\n"
        assert client.get("/other/one").text == "<div>global /one</div>\n"

    def test_step_template_option(self, make_client):
        app = bootstrap(routes=[{"steps": {"/first": {"template": "two"}}}])

        assert make_client(app).get("/first").text == "<div>two</div>\n"

    def test_session_options_from_environment(self, monkeypatch, app_1_route):
        monkeypatch.setenv("SESSION_NAME", "my.sid")
        monkeypatch.setenv("SESSION_TTL", "60")

        app = bootstrap(views=False, routes=[app_1_route])

        assert app.options.session.name == "my.sid"
        assert app.options.session.ttl == 60

    def test_options_dict_and_keyword_overrides(self, app_1_route):
        app = bootstrap({"views": "views", "port": 9000}, views=False, routes=[app_1_route])

        assert app.options.views is False
        assert app.options.port == 9000
        assert app.options.caller == TESTS_DIR

    def test_nested_options_merge_with_defaults(self, app_1_route):
        app = bootstrap(views=False, session={"secret": "s3cret"}, routes=[app_1_route])

        assert app.options.session.secret == "s3cret"
        assert app.options.session.name == "hod.sid"
